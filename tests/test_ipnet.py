import ipaddress

import pytest

from kubeutil.ipnet import IPNetSet, IPSet, parse_ip_nets, parse_ip_set
from kubeutil.netparse import parse_cidr_sloppy, parse_ip_sloppy


def parse_ip_net(text):
    return parse_cidr_sloppy(text)[1]


def test_ip_nets():
    s = IPNetSet()
    s2 = IPNetSet()
    assert len(s) == 0
    a = parse_ip_net("1.0.0.0/8")
    b = parse_ip_net("2.0.0.0/8")
    c = parse_ip_net("3.0.0.0/8")
    d = parse_ip_net("4.0.0.0/8")

    s.insert(a, b)
    assert len(s) == 2
    s.insert(c)
    assert not s.has(d)
    assert s.has(a)
    s.delete(a)
    assert not s.has(a)
    s.insert(a)
    assert not s.has_all(a, b, d)
    assert s.has_all(a, b)
    s2.insert(a, b, d)
    assert not s.is_superset(s2)
    s2.delete(d)
    assert s.is_superset(s2)


def test_ip_net_set_delete_multiples():
    a = parse_ip_net("1.0.0.0/8")
    b = parse_ip_net("2.0.0.0/8")
    c = parse_ip_net("3.0.0.0/8")
    s = IPNetSet()
    s.insert(a, b, c)
    assert len(s) == 3
    s.delete(a, c)
    assert len(s) == 1
    assert a not in s
    assert c not in s
    assert b in s


def test_new_ip_net_set():
    s = parse_ip_nets("1.0.0.0/8", "2.0.0.0/8", "3.0.0.0/8")
    assert len(s) == 3
    for cidr in ("1.0.0.0/8", "2.0.0.0/8", "3.0.0.0/8"):
        assert s.has(parse_ip_net(cidr))


def test_ip_net_set_difference():
    left = parse_ip_nets("1.0.0.0/8", "2.0.0.0/8", "3.0.0.0/8")
    right = parse_ip_nets("1.0.0.0/8", "2.0.0.0/8", "4.0.0.0/8", "5.0.0.0/8")
    c = left.difference(right)
    d = right.difference(left)
    assert len(c) == 1
    assert c.has(parse_ip_net("3.0.0.0/8"))
    assert len(d) == 2
    assert d.has(parse_ip_net("4.0.0.0/8"))
    assert d.has(parse_ip_net("5.0.0.0/8"))


def test_ip_net_set_list():
    s = parse_ip_nets("3.0.0.0/8", "1.0.0.0/8", "2.0.0.0/8")
    assert sorted(s.string_slice()) == ["1.0.0.0/8", "2.0.0.0/8", "3.0.0.0/8"]


def test_parse_ip_nets_strips_and_rejects():
    s = parse_ip_nets("  1.0.0.0/8 ")
    assert s.has(parse_ip_net("1.0.0.0/8"))
    with pytest.raises(ValueError):
        parse_ip_nets("1.0.0.0/8", "not-a-valid-cidr")


def test_ip_net_set_iteration_and_equality():
    s = parse_ip_nets("1.0.0.0/8", "2.0.0.0/8")
    assert sorted(str(n) for n in s) == ["1.0.0.0/8", "2.0.0.0/8"]
    assert s == parse_ip_nets("2.0.0.0/8", "1.0.0.0/8")
    assert not s == parse_ip_nets("1.0.0.0/8")


def test_ip_set():
    s = IPSet()
    s2 = IPSet()
    a = parse_ip_sloppy("1.0.0.0")
    b = parse_ip_sloppy("2.0.0.0")
    c = parse_ip_sloppy("3.0.0.0")
    d = parse_ip_sloppy("4.0.0.0")

    s.insert(a, b)
    assert len(s) == 2
    assert s.has(a)
    s.insert(c)
    assert not s.has(d)
    s.delete(a)
    assert not s.has(a)
    s.insert(a)
    assert not s.has_all(a, b, d)
    assert s.has_all(a, b)
    s2.insert(a, b, d)
    assert not s.is_superset(s2)
    s2.delete(d)
    assert s.is_superset(s2)


def test_ip_set_delete_multiples():
    a = parse_ip_sloppy("1.0.0.0")
    b = parse_ip_sloppy("2.0.0.0")
    c = parse_ip_sloppy("3.0.0.0")
    s = IPSet(a, b, c)
    assert len(s) == 3
    s.delete(a, c)
    assert len(s) == 1
    assert not s.has(a)
    assert not s.has(c)
    assert s.has(b)


def test_parse_ip_set():
    s = parse_ip_set("1.0.0.0", "2.0.0.0", "3.0.0.0", "::ffff:4.0.0.0")
    assert len(s) == 4
    for text in ("1.0.0.0", "2.0.0.0", "3.0.0.0", "::ffff:4.0.0.0", "4.0.0.0"):
        assert s.has(parse_ip_sloppy(text))


def test_ip_set_has_raw_mapped_address():
    s = parse_ip_set("4.0.0.0")
    assert s.has(ipaddress.IPv6Address("::ffff:4.0.0.0"))


def test_parse_ip_set_rejects_invalid():
    with pytest.raises(ValueError, match="not-an-ip"):
        parse_ip_set("1.0.0.0", "not-an-ip")


def test_ip_set_difference():
    left = parse_ip_set("1.0.0.0", "2.0.0.0", "3.0.0.0")
    right = parse_ip_set("1.0.0.0", "2.0.0.0", "4.0.0.0", "5.0.0.0")
    c = left.difference(right)
    d = right.difference(left)
    assert len(c) == 1
    assert c.has(parse_ip_sloppy("3.0.0.0"))
    assert len(d) == 2
    assert d.has(parse_ip_sloppy("4.0.0.0"))
    assert d.has(parse_ip_sloppy("5.0.0.0"))


def test_ip_set_list():
    s = parse_ip_set("3.0.0.0", "1.0.0.0", "2.0.0.0", "::ffff:1.2.3.4")
    assert sorted(s.string_slice()) == ["1.0.0.0", "1.2.3.4", "2.0.0.0", "3.0.0.0"]


def test_ip_set_equal():
    set1 = parse_ip_set("1.0.0.0", "2.0.0.0", "3.0.0.0", "::ffff:4.0.0.0")
    set2 = parse_ip_set("1.0.0.0", "2.0.0.0", "3.0.0.0", "4.0.0.0")
    assert set1 == set2

    set1 = parse_ip_set("1.0.0.0", "2.0.0.0", "3.0.0.0")
    set2 = parse_ip_set("3.0.0.0", "1.0.0.0", "2.0.0.0")
    assert set1 == set2