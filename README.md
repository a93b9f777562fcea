# spike

`spike` is a Python library of building blocks for a reconnaissance
pipeline. It starts common tools as separate programs and keeps what they
find in a SQLite database:

- **subfinder** enumerates subdomains of a root domain,
- **httpx** probes which hosts are live,
- **katana** and **gau** collect URLs,
- **nuclei** scans URLs with template sets, DAST templates and a dedicated
  DOM XSS template.

`subfinder`, `httpx`, `katana`, `gau` and `nuclei` must be installed and on
your `PATH` for the scanning functions to work. Output lines from every tool
are de-duplicated (first occurrence kept) and blank lines are dropped. A tool
that cannot be started or exits with a non-zero status raises
`spike.utils.CommandError`.

## Installation

```
pip install .
pip install ".[test]"   # with pytest, to run the test suite
```

## Configuration

Settings live in a YAML file. `spike.config.load_config(path)` reads it and
returns a `Config`. If the file does not exist yet, it first writes the
defaults there with `spike.config.save_default_config(path)`; the directory
holding the file must already exist. `spike.config.default_config(home_dir)`
builds the default `Config` in memory, with its paths under `home_dir`
(`$HOME` when omitted): the application directory is `<home>/spike`, the
database `<home>/spike/spike.db`. `save_default_config` always uses `$HOME`.

The file has three sections:

```yaml
app:
  app_dir: /home/me/spike
  default_db_path: /home/me/spike/spike.db
  default_config_path: /home/me/spike/config.yaml
tools:
  httpx:
    threads: 50
  subfinder:
    threads: 10
  crawler:
    katana:
      enabled: true
      threads: 10
      crawl_depth: 3
      max_crawl_time: 10m
      parallelism_threads: 10
      headless: false
      no_sandbox: false
    gau:
      enabled: true
      threads: 10
  nuclei:
    enabled: true
    threads: 25
    template_paths:
      default: /home/me/nuclei-templates
      custom: /home/me/custom-nuclei-templates
    template_settings:
      default_enabled: true
      custom_enabled: true
      dast_enabled: true
      headless_enabled: false
    custom_scan_options:
      dom_xss: true
    custom_scan_templates:
      dom_xss: /home/me/nuclei-templates/dast/vulnerabilities/xss/dom-xss.yaml
reporter:
  telegram:
    enabled: false
    bot_token: ""
    chat_id: ""
```

Keys left out of the file keep zero values (`false`, `0`, empty string).
A value of the wrong type, unreadable YAML, or a file that cannot be read
or written raises `spike.config.ConfigError`. Every section is a dataclass
with `from_dict(data)` and `to_dict()`.

## Usage

```python
from spike.config import load_config
from spike.db import Database
from spike import domains, subfinder, httpx, crawler, nuclei

cfg = load_config("/home/me/spike/config.yaml")
tools = cfg.tools

with Database() as db:
    db.connect(cfg.app.default_db_path)
    domains.push_domains_to_db(db, ["example.com"])
    for record in domains.select_domains(db):
        subs = subfinder.get_subdomains(record.domain, tools.subfinder.threads)
        subfinder.push_subdomains_to_db(db, record.id, subs)

        live = httpx.probe(subs, tools.httpx.threads)
        httpx.create_live_hosts_table(db)
        httpx.insert_live_hosts(db, record.id, live)

        urls = crawler.run_crawlers(tools.crawler, live, record.domain)
        crawler.create_crawler_table(db)
        crawler.insert_urls(db, record.id, urls)

        if tools.nuclei.enabled:
            reports = nuclei.generic_scan(tools.nuclei, urls)
            reports += nuclei.dast_scan(tools.nuclei, urls)
            nuclei.create_nuclei_table(db)
            nuclei.insert_reports(db, record.id, reports)

        # matched against the domain column, so pass the domain name
        domains.update_domain_scanned(db, record.domain)
```

`Database` enables foreign keys on connect, so the `domains` table must exist
before rows that refer to it are inserted. Inserting a domain that is already
stored fails with `sqlite3.IntegrityError`.

## Modules

- `spike.config` – configuration dataclasses, `default_config`,
  `load_config`, `save_default_config`, `ConfigError`.
- `spike.db` – `Database`, a SQLite wrapper with `connect`, `close`,
  `exec_stmt`, `exec_insert`, transactional `exec_bulk_insert` (rolled back
  on error), `query`, and use as a context manager; `make_args_list(prefix,
  values)` pairs a prefix with each value for bulk inserts.
- `spike.utils` – `is_file`, `is_directory`,
  `remove_duplicates_and_empty_strings`, `join_lines`, `lines_to_list`,
  `run_command` and `run_command_with_stdin`.
- `spike.domains` – the `domains` table, `DomainRecord`, `select_domains`,
  `insert_domain`, `insert_domains`, `push_domains_to_db`,
  `update_domain_scanned`.
- `spike.subfinder` – `get_subdomains` (the root domain is always included),
  `push_subdomains_to_db` (creates the table), `insert_subdomains`.
- `spike.httpx` – `probe`, `create_live_hosts_table`, `insert_live_host`,
  `insert_live_hosts`.
- `spike.katana` – `build_katana_args`, `crawl_hosts`, and the `katana` table
  helpers.
- `spike.gau` – `get_all_urls` (with `--subs`), and the `gau` table helpers.
- `spike.crawler` – `run_crawlers` runs katana on the live hosts and gau on
  the root domain, as enabled, and returns katana's URLs followed by gau's;
  raises `CrawlerError` when neither crawler is enabled or one fails. Also
  the `crawler` table helpers.
- `spike.nuclei` – `build_nuclei_args`, `generic_scan`, `dast_scan`,
  `scan_dom_xss`, `validate_nuclei_config`, and the `nuclei` table helpers.
  Enabled template directories must exist and the DOM XSS template must be a
  file (`NucleiConfigError`); headless templates together with the DOM XSS
  option raise `HeadlessDomXSSConflict`. `generic_scan` and `dast_scan` do
  not change the configuration passed in.
- `spike.scanner` – `Scanner`, holding domains, output choices and settings;
  `validate()` raises `ScannerError` when `domains` is `None` and turns on
  `log` when neither `log` nor `save_scan_to_db` is set.

## What it does not do

- There is no command-line program; the package is used from Python.
- `Scanner.scan()` only validates its settings and, when `save_scan_to_db`
  is set, opens and closes the database. It does not run the tools; chain
  the module functions yourself as in the example above.
- The `reporter.telegram` settings are read and written with the rest of the
  configuration, but nothing in the package sends reports.