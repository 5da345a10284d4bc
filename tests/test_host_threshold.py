from healthprobe.host_threshold import (
    DEFAULT_CPU_THRESHOLD,
    DEFAULT_DISK_THRESHOLD,
    ResourceUsage,
    Threshold,
    add_message,
    first,
    str_float,
    str_int,
)


def test_threshold_str_prefix():
    t = Threshold(cpu=0.15, mem=0.10, disk=0.90)
    assert str(t).startswith("CPU: 0.15, Mem: 0.10, Disk: 0.90")
    assert str(t).endswith("Load: ")


def test_threshold_str_load_joined_in_order():
    t = Threshold(load={"m1": 0.8, "m5": 0.8, "m15": 0.8})
    assert str(t).endswith("Load: 0.80/0.80/0.80")
    assert str(t).count("/") == 2


def test_threshold_defaults_are_zero():
    t = Threshold()
    assert (t.cpu, t.mem, t.disk, t.load) == (0.0, 0.0, 0.0, None)
    assert DEFAULT_CPU_THRESHOLD < DEFAULT_DISK_THRESHOLD


def test_resource_usage_defaults():
    r = ResourceUsage(used=58, total=97, usage=60.0, tag="/")
    assert r.total - r.used == 39
    assert ResourceUsage() == ResourceUsage(0, 0, 0.0, "")


def test_first():
    assert first("  71.6 us") == "71.6"
    assert first("single") == "single"
    assert first("   ") == ""


def test_str_float_parses_and_defaults():
    assert str_float(" 0.5 ") == 0.5
    assert str_float("abc") == 0.0
    assert str_float("") == 0.0
    assert f"{str_float('28.04'):.2f}" == "28.04"


def test_str_float_single_precision():
    value = str_float("71.6")
    assert abs(value - 71.6) < 1e-5
    assert str_float(repr(value)) == value


def test_str_int():
    assert str_int("4") == 4
    assert str_int(" 15718 ") == 15718
    assert str_int("-3") == -3
    assert str_int("4.5") == 0
    assert str_int("abc") == 0
    assert str_int("1_000") == 0


def test_str_int_saturates():
    assert str_int("99999999999") == 2**31 - 1
    assert str_int("-99999999999") == -(2**31)


def test_add_message():
    assert add_message("", "x") == "x"
    assert add_message("x", "") == ""
    assert add_message("CPU threshold alert!", "Memory threshold alert!") == (
        "CPU threshold alert! | Memory threshold alert!"
    )