import logging
import time

import pytest

from healthprobe.http_trace import TraceStats, to_ms

MINUTE = 60.0


def test_new_trace_stats():
    s = TraceStats("http", "tag", "test")
    assert s.kind == "http"
    assert s.name == "test"
    assert s.tag == "tag"


@pytest.mark.parametrize(
    "attr, call",
    [
        ("total_start_at", lambda s: s.get_conn("8080")),
        ("dns_start_at", lambda s: s.dns_start("example.com")),
        ("conn_start_at", lambda s: s.connect_start("tcp", "8080")),
        ("send_start_at", lambda s: s.wrote_header_field("key", ["value"])),
        ("tls_start_at", lambda s: s.tls_start()),
        ("transfer_start_at", lambda s: s.got_first_response_byte()),
        ("wait_start_at", lambda s: s.wrote_request(None)),
    ],
)
def test_trace_start(attr, call):
    s = TraceStats("http", "tag", "test")
    assert getattr(s, attr) is None
    call(s)
    assert 0 <= time.time() - getattr(s, attr) < MINUTE


def test_connect_start_keeps_first_time():
    s = TraceStats("http", "tag", "test")
    s.connect_start("tcp", "8080")
    first = s.conn_start_at
    time.sleep(0.01)
    s.connect_start("tcp", "8081")
    assert s.conn_start_at == first


def _started():
    s = TraceStats("http", "tag", "test")
    now = time.time()
    s.conn_start_at = now
    s.dns_start_at = now
    s.send_start_at = now
    s.tls_start_at = now
    s.transfer_start_at = now
    s.wait_start_at = now
    s.total_start_at = now
    return s


@pytest.mark.parametrize(
    "attr, calls",
    [
        (
            "dns_took",
            [lambda s: s.dns_done(["1.2.3.4"], None), lambda s: s.dns_done([], OSError("dns"))],
        ),
        (
            "conn_took",
            [
                lambda s: s.connect_done("tcp", "8080", None),
                lambda s: s.connect_done("tcp", "8080", OSError("conn")),
            ],
        ),
        (
            "tls_took",
            [lambda s: s.tls_done("", None), lambda s: s.tls_done("", ValueError("test error"))],
        ),
        ("send_took", [lambda s: s.wrote_headers()]),
        ("wait_took", [lambda s: s.got_first_response_byte()]),
        (
            "transfer_took",
            [lambda s: s.put_idle_conn(None), lambda s: s.put_idle_conn(ValueError("test error"))],
        ),
    ],
)
def test_trace_done(attr, calls):
    s = _started()
    assert getattr(s, attr) == 0.0
    for call in calls:
        call(s)
        assert 0 <= getattr(s, attr) < MINUTE


def test_got_conn_does_not_change_timing():
    s = _started()
    s.connect_done("tcp", "8080", None)
    took = s.conn_took
    s.got_conn(False, False, 0.0)
    assert s.conn_took == took


def test_done_sets_total():
    s = _started()
    time.sleep(0.01)
    s.done()
    assert s.total_took >= 0.01
    assert s.transfer_took >= 0.01


def test_report_logs_table(caplog):
    s = TraceStats("http", "tag", "test")
    s.dns_took = 0.0015
    with caplog.at_level(logging.DEBUG, logger="healthprobe.http_trace"):
        s.report()
    text = caplog.text
    assert "[http tag test] DNS\tConnect\tTLS\tSend\tWait\tTrans\tTotal" in text
    assert "[http tag test] 1.50\t0.00\t0.00" in text


def test_to_ms():
    assert to_ms(1.5) == 1500.0
    assert to_ms(0.0) == 0.0