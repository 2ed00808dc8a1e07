import enum
import logging


class LogLevel(enum.IntEnum):
    debug = logging.DEBUG
    info = logging.INFO
    warn = logging.WARN
    error = logging.ERROR
    fatal = logging.FATAL
    crit = logging.CRITICAL

    def __str__(self):
        return self.name


class ReportMode(enum.Enum):
    table = 'table'
    renew = 'renew'
    problems = 'problems'
    command = 'command'


DEFAULT_PORT = 443
DEFAULT_EXPIRES = 30

NO_VALUE = '-'
ALT_SUFFIX = ' (alt)'

PROBLEM_NO_CERT = 'no certificate found'
PROBLEM_MISMATCH = 'possible name mismatch'
PROBLEM_NEAR_RENEWAL = 'certificate near renewal date'

# notAfter as printed by `openssl x509 -enddate`
EXPIRY_FORMAT = '%b %d %H:%M:%S %Y GMT'

SERVER_CPANEL = 'cpanel'
SERVER_ISPCONFIG = 'ISPconfig'
CPANEL_USERDOMAINS = '/etc/userdomains'
APACHECTL_CMD = ('apache2ctl', '-S')

PACKAGE_NAME = 'sslcertcheck'
VERSION_URL = 'https://pypi.org/pypi/%s/json' % PACKAGE_NAME
VERSION_TIMEOUT = 10.
