#!/usr/bin/env python3

import sys
import argparse

from . import __version__
from . import constants
from . import utils
from . import config as config_mod
from . import report
from .collector import collect, CollectorError
from .inspector import CertificateInspector
from .upgrade import check_upgrade, UpgradeError


LOGGERS = ('MAIN', 'COLLECTOR', 'CertificateInspector', 'COMMAND', 'UPGRADE')


def make_parser():
    parser = argparse.ArgumentParser(
        prog=constants.PACKAGE_NAME,
        description='Reports issuance, expiry, issuer and possible problems '
                    'of TLS certificates served for a set of domains.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument("domain",
                        nargs="?",
                        help="single domain to check")
    parser.add_argument("-f", "--file",
                        help="file with domain list, one per line")
    parser.add_argument("-s", "--server",
                        help="take domains from server configuration: "
                             "%s or %s" % (constants.SERVER_CPANEL,
                                           constants.SERVER_ISPCONFIG))
    parser.add_argument("-l", "--location",
                        help="take domains from subdirectory names of given "
                             "directory (e.g. /etc/letsencrypt/live)")
    parser.add_argument("-e", "--expires",
                        type=utils.check_nonnegative_int,
                        default=constants.DEFAULT_EXPIRES,
                        help="days before expiry to flag certificate for renewal")
    parser.add_argument("-r", "--renew",
                        action="store_true",
                        help="print only domains which need renewal")
    parser.add_argument("-p", "--problems",
                        action="store_true",
                        help="print only domains with possible problems "
                             "(ignored with -r or -c)")
    parser.add_argument("-c", "--command",
                        help="run command with domain as argument for every "
                             "domain which needs renewal (takes precedence "
                             "over -r and -p)")
    parser.add_argument("-u", "--upgrade",
                        action="store_true",
                        help="check if newer version is published")
    parser.add_argument("--upgrade-url",
                        default=constants.VERSION_URL,
                        help="JSON release index queried by --upgrade, "
                             "in PyPI JSON API format")
    parser.add_argument("-d", "--debug",
                        action="store_true",
                        help="debug output, same as --verbosity debug")
    parser.add_argument("-v", "--verbosity",
                        help="logging verbosity",
                        type=utils.check_loglevel,
                        choices=constants.LogLevel,
                        default=constants.LogLevel.warn)
    parser.add_argument("--version",
                        action="version",
                        version="%(prog)s " + __version__)
    return parser


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)
    config = config_mod.from_args(args)
    logger = utils.setup_logger(LOGGERS[0], config.verbosity)
    for name in LOGGERS[1:]:
        utils.setup_logger(name, config.verbosity)

    if args.upgrade:
        try:
            check_upgrade(url=config.upgrade_url)
        except UpgradeError as exc:
            logger.critical("%s", exc)
            sys.exit(1)

    if not config_mod.has_sources(config):
        if not args.upgrade:
            parser.print_help()
        return

    try:
        domains = collect(config)
    except CollectorError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    logger.info("Checking %d domains, renewal alert at %d days",
                len(domains), config.expires)
    inspector = CertificateInspector(renew_alert_days=config.expires,
                                     port=config.port,
                                     timeout=config.timeout)
    records = list(inspector.inspect_all(domains))
    report.render(config, records)
    logger.info("Check finished.")


if __name__ == '__main__':  # pragma: no cover
    main()
