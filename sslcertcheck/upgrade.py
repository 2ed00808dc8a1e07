import logging

import requests

from . import __version__
from . import constants
from . import utils


class UpgradeError(Exception):
    pass


def fetch_latest_version(url=constants.VERSION_URL, timeout=constants.VERSION_TIMEOUT,
                         session=None):
    session = session if session is not None else requests
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.json()['info']['version']
    except requests.exceptions.RequestException as exc:
        raise UpgradeError("unable to fetch latest version from %s: %s" % (url, exc))
    except (ValueError, KeyError, TypeError) as exc:
        raise UpgradeError("malformed version response from %s: %s" % (url, exc))


def is_newer(remote, local=__version__):
    return utils.parse_version(remote) > utils.parse_version(local)


def check_upgrade(out_func=print, **kwargs):
    """ Reports whether newer release is published. Returns latest version. """
    logger = logging.getLogger('UPGRADE')
    latest = fetch_latest_version(**kwargs)
    logger.debug("Local version %s, latest published version %s", __version__, latest)
    if is_newer(latest):
        out_func("New version %s is available (installed: %s). "
                 "Upgrade with: pip install -U %s" % (latest, __version__, constants.PACKAGE_NAME))
    else:
        out_func("%s %s is up to date." % (constants.PACKAGE_NAME, __version__))
    return latest
