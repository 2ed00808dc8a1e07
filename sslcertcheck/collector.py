import os
import logging
import subprocess

from . import constants


class CollectorError(Exception):
    pass


def from_file(path):
    logger = logging.getLogger('COLLECTOR')
    if not os.path.isfile(path):
        raise CollectorError("domain list file %s not found" % (repr(path),))
    try:
        with open(path) as f:
            domains = [line.strip() for line in f if line.strip()]
    except (OSError, UnicodeDecodeError) as exc:
        raise CollectorError("unable to read domain list file %s: %s" % (repr(path), exc))
    logger.debug("Read %d domains from file %s", len(domains), repr(path))
    return domains


def parse_userdomains(lines):
    """ Parses cPanel domain ownership table, `domain: owner` per line.
    Entries without a dot (like the `*: nobody` catch-all) are skipped. """
    domains = []
    for line in lines:
        name = line.split(':', 1)[0].strip()
        if '.' in name:
            domains.append(name)
    return domains


def from_cpanel(path=constants.CPANEL_USERDOMAINS):
    try:
        with open(path) as f:
            return parse_userdomains(f)
    except OSError as exc:
        raise CollectorError("unable to read cPanel domain table %s: %s" % (repr(path), exc))


def parse_vhosts(output):
    """ Extracts server names from `apache2ctl -S` virtual host dump.
    Each name is reported once, in order of first appearance. """
    seen = set()
    domains = []
    for line in output.splitlines():
        tokens = line.split()
        try:
            idx = tokens.index('namevhost')
            name = tokens[idx + 1]
        except (ValueError, IndexError):
            continue
        if name not in seen:
            seen.add(name)
            domains.append(name)
    return domains


def from_ispconfig(cmd=constants.APACHECTL_CMD):
    logger = logging.getLogger('COLLECTOR')
    try:
        proc = subprocess.run(list(cmd),
                              stdout=subprocess.PIPE,
                              stderr=subprocess.PIPE,
                              universal_newlines=True)
    except FileNotFoundError:
        raise CollectorError("required tool %s not found" % (repr(cmd[0]),))
    if proc.returncode:
        logger.warning("%s exited with status %d: %s",
                       ' '.join(cmd), proc.returncode, proc.stderr.strip())
    return parse_vhosts(proc.stdout)


def from_server(server):
    if server == constants.SERVER_CPANEL:
        return from_cpanel()
    elif server == constants.SERVER_ISPCONFIG:
        return from_ispconfig()
    raise CollectorError("unknown server type %s" % (repr(server),))


def from_location(path):
    """ One domain per subdirectory, as laid out by ACME client
    certificate stores (e.g. /etc/letsencrypt/live) """
    try:
        entries = os.listdir(path)
    except OSError as exc:
        raise CollectorError("unable to list directory %s: %s" % (repr(path), exc))
    return sorted(name for name in entries
                  if os.path.isdir(os.path.join(path, name)))


def collect(config):
    logger = logging.getLogger('COLLECTOR')
    domains = []
    if config.domain is not None:
        domains.append(config.domain)
    if config.file is not None:
        domains.extend(from_file(config.file))
    if config.server is not None:
        domains.extend(from_server(config.server))
    if config.location is not None:
        domains.extend(from_location(config.location))
    logger.debug("Collected %d domains: %s", len(domains), domains)
    return domains
