from collections import namedtuple

from . import constants


Config = namedtuple('Config', (
    'domain',
    'file',
    'server',
    'location',
    'expires',
    'mode',
    'command',
    'port',
    'timeout',
    'verbosity',
    'upgrade_url',
))


def has_sources(config):
    return any(src is not None for src in
               (config.domain, config.file, config.server, config.location))


def from_args(args):
    if args.command is not None:
        mode = constants.ReportMode.command
    elif args.renew:
        mode = constants.ReportMode.renew
    elif args.problems:
        mode = constants.ReportMode.problems
    else:
        mode = constants.ReportMode.table
    return Config(domain=args.domain,
                  file=args.file,
                  server=args.server,
                  location=args.location,
                  expires=args.expires,
                  mode=mode,
                  command=args.command,
                  port=constants.DEFAULT_PORT,
                  timeout=None,
                  verbosity=constants.LogLevel.debug if args.debug else args.verbosity,
                  upgrade_url=args.upgrade_url)
