# healthprobe

Building blocks for service health probes: checking response text, parsing
host resource figures, timing the phases of an HTTP request, and validating
the data that database and cache clients are asked to verify.

## Modules

- `healthprobe.textcheck`
  - `TextChecker(contain="", not_contain="", regexp=False)` checks that a text
    contains `contain` and does not contain `not_contain`. With
    `regexp=True` both are regular expressions; call `configure()` first to
    compile them. Lookarounds and back-references are rejected with
    `TextCheckError`. `check(text)` raises `TextCheckError` when the text
    fails; `str(checker)` describes the mode and both settings.
  - `check_empty(s)` returns `"empty"` for a blank string, otherwise `s`.
- `healthprobe.host_threshold`
  - `Threshold(cpu, mem, disk, load)`: fractions (0.8 means 80 %); zero or
    `None` means the default is filled in when the metrics are configured
    (`DEFAULT_CPU_THRESHOLD`, `DEFAULT_MEM_THRESHOLD`,
    `DEFAULT_DISK_THRESHOLD`, `DEFAULT_LOAD_THRESHOLD`).
  - `ResourceUsage`, and the parsing helpers `first`, `str_float`, `str_int`
    and `add_message`.
- `healthprobe.host_metrics` – the abstract `HostMetric`, with `Basic` (host
  name, OS, cores) and `CPU`. Malformed output raises `HostOutputError`.
- `healthprobe.host_resources` – `Mem`, `Disks` and `Load`.
  Each metric gives the shell `command()` that prints its figures, `parse()`s
  that output, and reports `usage_info()` and `check_threshold()`.
- `healthprobe.host_server`
  - `Info` holds one of each metric; `Info.metrics()` lists them in output
    order.
  - `HostServer(probe_name, threshold, disks)`: `configure()` fills in default
    thresholds and builds the combined `command`; `parse_host_info(output)`
    parses the combined output; `evaluate(output)` returns `(ok, message)`,
    where the message names any alerts (or says `Fine!`) followed by a usage
    summary.
- `healthprobe.http_trace` – `TraceStats` records start times and durations of
  the DNS, connect, TLS, send, wait, transfer and total phases. Its methods
  (`get_conn`, `dns_start`, `dns_done`, `connect_start`, `connect_done`,
  `tls_start`, `tls_done`, `wrote_header_field`, `wrote_headers`,
  `wrote_request`, `got_first_response_byte`, `done`, …) are called by the
  code making the request; `done()` logs a table of durations at debug level.
  `to_ms(seconds)` converts to milliseconds.
- `healthprobe.client_conf`
  - `DriverType` (`MYSQL`, `REDIS`, `MEMCACHE`, `KAFKA`, `MONGO`,
    `POSTGRESQL`, `ZOOKEEPER`, `UNKNOWN`); `str()` gives its name,
    `DriverType.parse(name)` gives `UNKNOWN` for unknown names.
  - `driver_to_yaml`, `driver_from_yaml`, `driver_to_json`,
    `driver_from_json`; reading an unknown name raises `ClientConfigError`.
  - `ClientOptions(host, driver, username, password, data)`; `check()` raises
    `ClientConfigError` for a bad `host:port`, a port outside 1–65535, or an
    unknown driver.
- `healthprobe.client_data` – `mysql_query`, `postgres_query`,
  `mongo_db_collection`, `mongo_filter`, `check_mysql_data`,
  `check_postgres_data`, `check_mongo_data` (all raise `DataSpecError` for a
  malformed specification) and `memcache_validate(expected, items)`.

## Examples

```python
from healthprobe.textcheck import TextChecker

checker = TextChecker(contain="hello", not_contain="bad")
checker.configure()
checker.check("easeprobe hello world")  # raises TextCheckError on failure
```

```python
from healthprobe.host_server import HostServer

server = HostServer(probe_name="web", disks=["/", "/data"])
server.configure()
print(server.command)          # run this on the host yourself
ok, message = server.evaluate(output_of_that_command)
```

```python
from healthprobe.client_data import mysql_query, postgres_query

mysql_query("shop:orders:status:id:1")
# 'SELECT status FROM shop.orders WHERE id = 1'
postgres_query("shop:orders:status:id:1")
# ('shop', 'SELECT status FROM orders WHERE id = 1')
```

## What the package does not do

It has no command-line program, no scheduler and no notification or storage of
results. It does not connect to anything: `HostServer` builds the command and
evaluates its output but does not run it over SSH, `TraceStats` only records
the timings it is told about, and the client modules validate configuration
and data specifications without talking to MySQL, PostgreSQL, MongoDB,
Memcache, Redis, Kafka or ZooKeeper. No metrics are exported.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```