import sys
import logging

from argparse import ArgumentParser

from cidrmatch import CidrError
from cidrmatch.config import DEFAULT_CONFIG, Config

__all__ = ['main']


def cmd_check(config, args):
    group = config.get_network(args.network, strict=args.strict)
    all_matched = True
    for address in args.addresses:
        matched = group.matches(address)
        all_matched = all_matched and matched
        print(f"{address}: {'yes' if matched else 'no'}")
    return 0 if all_matched else 1


def cmd_range(config, args):
    group = config.get_network(args.network, strict=args.strict)
    for network in group.networks:
        print(f"{network.first} - {network.last}")
    return 0


def cmd_list(config, args):
    for name in config.network_names:
        print(f"{name}: {', '.join(config.get_cidrs(name))}")
    return 0


def make_parser():
    parser = ArgumentParser(
        prog='cidrmatchctl',
        description="Check whether IP addresses are within network ranges."
    )
    parser.add_argument('-c', '--config', dest='configfile',
                        default=DEFAULT_CONFIG,
                        help="Config file with named networks"
                             " (default: %(default)s)")
    parser.add_argument('-s', '--strict', action='store_true', default=None,
                        help="Reject addresses and prefixes that are not"
                             " strictly valid")
    parser.add_argument('-d', '--debug', action='store_true', default=False,
                        help="Show debug output")

    subparsers = parser.add_subparsers(dest='command', required=True)

    check_parser = subparsers.add_parser(
        'check', help="Check addresses against a network"
    )
    check_parser.add_argument('network', metavar='NETWORK',
                              help="Address range in CIDR notation or the"
                                   " name of a configured network")
    check_parser.add_argument('addresses', metavar='ADDRESS', nargs='+',
                              help="Address to check")
    check_parser.set_defaults(func=cmd_check)

    range_parser = subparsers.add_parser(
        'range', help="Show first and last address of a network"
    )
    range_parser.add_argument('network', metavar='NETWORK',
                              help="Address range in CIDR notation or the"
                                   " name of a configured network")
    range_parser.set_defaults(func=cmd_range)

    list_parser = subparsers.add_parser(
        'list', help="List configured networks"
    )
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = Config(args.configfile)
        return args.func(config, args)
    except CidrError as err:
        sys.stderr.write(f"error: {err}\n")
        return 2
