import pytest

from sealkit.cidr import parse_cidr, parse_cidr_string


def test_ipv4_standard_form():
    assert parse_cidr_string("192.168.1.7/24") == "192.168.1.0/24"


def test_ipv6_standard_form_is_stable():
    assert parse_cidr_string("2001:db8::/64") == "2001:db8::/64"


def test_ipv4_properties():
    c = parse_cidr("192.168.1.7/24")
    assert c.is_ipv4()
    assert not c.is_ipv6()
    assert c.ip() == "192.168.1.7"
    assert c.network() == "192.168.1.0"
    assert c.mask_size() == (24, 32)
    assert c.mask() == "255.255.255.0"
    assert str(c) == "192.168.1.0/24"


def test_ipv6_properties():
    c = parse_cidr("2001:db8::5/64")
    assert c.is_ipv6()
    assert not c.is_ipv4()
    assert c.ip() == "2001:db8::5"
    assert c.network() == "2001:db8::"
    assert c.mask_size()[0] == 64
    assert c.cidr() == "2001:db8::/64"


def test_network_and_prefix_reparse_to_same_cidr():
    for text in ["10.1.2.3/8", "172.16.5.4/20", "2001:db8::1/48"]:
        c = parse_cidr(text)
        again = parse_cidr(f"{c.network()}/{c.mask_size()[0]}")
        assert again.cidr() == c.cidr()
        assert again.ip() == again.network()


@pytest.mark.parametrize(
    "text",
    ["192.168.1.0", "abc/24", "10.0.0.0/33", "10.0.0.0/255.255.255.0", "10.0.0.0/", "2001:db8::/129"],
)
def test_invalid_cidr_raises(text):
    with pytest.raises(ValueError):
        parse_cidr(text)
    with pytest.raises(ValueError):
        parse_cidr_string(text)