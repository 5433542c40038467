import re
import socket

from cidrmatch import MalformedInput

IPV4_LEN = 4
IPV6_LEN = 16

# Longest run of decimal digits converted to a number.
MAX_DIGITS = 64

_DIGIT_RUN = re.compile(r'[0-9]+')
_HEX_RUN = re.compile(r'[0-9a-f]+')


def is_ipv6_text(addr):
    """
    Return True if the given text looks like an IPv6 address, False if it
    looks like an IPv4 address and raise MalformedInput if it's neither.
    """
    if ':' in addr:
        return True
    elif '.' in addr:
        return False
    raise MalformedInput("Address is neither dotted-decimal nor colon-hex",
                         addr)


def parse_ipv4(addr):
    """
    Return the four bytes of the given IPv4 address as a tuple, refusing
    anything that isn't a complete and valid dotted quad.
    """
    try:
        binary_ip = socket.inet_pton(socket.AF_INET, addr)
    except (socket.error, ValueError) as err:
        raise MalformedInput("Invalid IPv4 address", addr) from err
    return tuple(binary_ip)


def parse_ipv6(addr):
    """
    Return the sixteen bytes of the given IPv6 address as a tuple, refusing
    anything that isn't a valid IPv6 address.
    """
    try:
        binary_ip = socket.inet_pton(socket.AF_INET6, addr)
    except (socket.error, ValueError) as err:
        raise MalformedInput("Invalid IPv6 address", addr) from err
    return tuple(binary_ip)


def parse_ipv4_bytes(addr):
    """
    Best-effort variant of parse_ipv4().

    Every run of decimal digits is placed into the next byte position, so
    missing octets stay zero and values aren't checked against 0-255:

    >>> parse_ipv4_bytes('127.0.0.1')
    (127, 0, 0, 1)
    >>> parse_ipv4_bytes('10.1')
    (10, 1, 0, 0)
    """
    result = [0] * IPV4_LEN
    for pos, part in enumerate(_DIGIT_RUN.findall(addr)[:IPV4_LEN]):
        if len(part) > MAX_DIGITS:
            raise MalformedInput("Octet too long", addr)
        result[pos] = int(part, 10)
    return tuple(result)


def _group_bytes(group):
    if '.' in group:
        return list(parse_ipv4_bytes(group))
    match = _HEX_RUN.match(group)
    if match is None:
        return []
    token = match.group()
    if len(token) > 2:
        return [int(token[:-2], 16), int(token[-2:], 16)]
    return [0, int(token, 16)]


def _groups_to_bytes(text):
    result = []
    for group in text.split(':'):
        if group:
            result.extend(_group_bytes(group))
    return result


def parse_ipv6_bytes(addr):
    """
    Best-effort variant of parse_ipv6().

    Groups before the '::' elision are written from the start of the
    address, groups after it are aligned to the end, everything else stays
    zero. Groups longer than four hex digits aren't rejected, their excess
    ends up in the high byte of the group.

    >>> parse_ipv6_bytes('::1')[-2:]
    (0, 1)
    >>> parse_ipv6_bytes('2001:db8::')[:4]
    (32, 1, 13, 184)
    """
    result = [0] * IPV6_LEN
    head, elided, tail = addr.lower().partition('::')

    head_bytes = _groups_to_bytes(head)[:IPV6_LEN]
    result[:len(head_bytes)] = head_bytes

    if elided:
        tail_bytes = _groups_to_bytes(tail)
        tail_bytes = tail_bytes[max(0, len(tail_bytes) - IPV6_LEN):]
        if tail_bytes:
            result[IPV6_LEN - len(tail_bytes):] = tail_bytes

    return tuple(result)


def parse_address(addr, strict=False):
    """
    Parse an IPv4 or IPv6 address into a tuple of 4 or 16 byte values.

    By default, parsing is lenient and missing parts of the address are
    filled with zeros. If strict is True, the address has to be valid for
    the platform's inet_pton() or MalformedInput is raised.
    """
    if is_ipv6_text(addr):
        return parse_ipv6(addr) if strict else parse_ipv6_bytes(addr)
    else:
        return parse_ipv4(addr) if strict else parse_ipv4_bytes(addr)


def format_address(addr_bytes):
    """
    Convert a tuple of 4 or 16 byte values back into quad-dotted or shortened
    colon-hex notation.
    """
    if len(addr_bytes) == IPV4_LEN:
        family = socket.AF_INET
    elif len(addr_bytes) == IPV6_LEN:
        family = socket.AF_INET6
    else:
        raise MalformedInput("Address has to be 4 or 16 bytes long",
                             addr_bytes)

    try:
        packed = bytes(addr_bytes)
    except ValueError as err:
        raise MalformedInput("Byte value out of range", addr_bytes) from err
    return socket.inet_ntop(family, packed)
