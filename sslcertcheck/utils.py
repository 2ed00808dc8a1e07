import re
import argparse
import logging

from cryptography import x509
from cryptography.x509.oid import ExtensionOID, NameOID

from . import constants


def setup_logger(name, verbosity):
    logger = logging.getLogger(name)
    logger.setLevel(verbosity)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(verbosity)
        return logger
    handler = logging.StreamHandler()
    handler.setLevel(verbosity)
    handler.setFormatter(logging.Formatter('%(asctime)s '
                                           '%(levelname)-8s '
                                           '%(name)s: %(message)s',
                                           '%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)
    return logger


def check_loglevel(arg):
    try:
        return constants.LogLevel[arg]
    except (IndexError, KeyError):
        raise argparse.ArgumentTypeError("%s is not valid loglevel" % (repr(arg),))


def check_nonnegative_int(val):
    def fail():
        raise argparse.ArgumentTypeError("%s is not valid non-negative integer" % (repr(val),))
    try:
        ival = int(val)
    except ValueError:
        fail()
    if ival < 0:
        fail()
    return ival


def get_common_name(name):
    """ Returns first CN attribute value of x509 Name or None """
    common_names = name.get_attributes_for_oid(NameOID.COMMON_NAME)
    if common_names:
        return common_names[0].value
    return None


def get_x509_alt_names(cert):
    try:
        alt_names = cert.extensions.get_extension_for_oid(ExtensionOID.SUBJECT_ALTERNATIVE_NAME)
    except x509.ExtensionNotFound:
        return []
    return alt_names.value.get_values_for_type(x509.DNSName)


PRE_RELEASE_ORDER = {
    'dev': 0,
    'a': 1,
    'alpha': 1,
    'b': 2,
    'beta': 2,
    'c': 3,
    'rc': 3,
    'pre': 3,
    'preview': 3,
}
FINAL_RELEASE = len(PRE_RELEASE_ORDER)

VERSION_PART_RE = re.compile(r'^(\d*)[-_]?([a-zA-Z]*)(\d*)')


def parse_version(version):
    """ Returns sortable key for PEP 440-like version string.

    Release numbers are compared with trailing zeros ignored, then
    pre-release tag (dev < a < b < rc < final) and its number. Local
    version labels after '+' are ignored. """
    release = []
    pre = (FINAL_RELEASE, 0)
    for part in version.split('+', 1)[0].strip().lower().lstrip('v').split('.'):
        digits, tag, num = VERSION_PART_RE.match(part).groups()
        if digits:
            release.append(int(digits))
        if tag:
            pre = (PRE_RELEASE_ORDER.get(tag, 0), int(num or 0))
            break
    while release and not release[-1]:
        release.pop()
    return tuple(release), pre
