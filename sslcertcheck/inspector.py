import logging
from collections import namedtuple
from datetime import datetime, timedelta, timezone

from . import constants
from . import scanner
from . import utils


CertificateRecord = namedtuple('CertificateRecord',
                               ('domain', 'issued_to', 'issuer', 'expiry', 'problems'))

CertificateFields = namedtuple('CertificateFields',
                               ('subject_cn', 'issuer_cn', 'expiry', 'alt_names'))


def read_certificate(cert):
    return CertificateFields(subject_cn=utils.get_common_name(cert.subject) or '',
                             issuer_cn=utils.get_common_name(cert.issuer),
                             expiry=cert.not_valid_after_utc,
                             alt_names=utils.get_x509_alt_names(cert))


def is_near_renewal(expiry, renew_alert_days, now):
    return now + timedelta(days=renew_alert_days) > expiry


def classify(domain, fields, renew_alert_days, now):
    """ Builds CertificateRecord for domain out of certificate fields.

    fields is None when no certificate could be obtained. Name matching is
    literal: subject CN first, then SAN DNS entries. Wildcards are not
    expanded. """
    problems = []
    if fields is None:
        issued_to = constants.NO_VALUE
        issuer = constants.NO_VALUE
        expiry = constants.NO_VALUE
    else:
        issued_to = fields.subject_cn
        issuer = fields.issuer_cn or constants.NO_VALUE
        expiry = fields.expiry

    if issued_to != domain:
        if fields is not None and domain in fields.alt_names:
            issued_to = domain + constants.ALT_SUFFIX
        elif fields is not None:
            problems.append(constants.PROBLEM_MISMATCH)
        else:
            problems.append(constants.PROBLEM_NO_CERT)

    if fields is not None and is_near_renewal(expiry, renew_alert_days, now):
        problems.append(constants.PROBLEM_NEAR_RENEWAL)

    return CertificateRecord(domain=domain,
                             issued_to=issued_to,
                             issuer=issuer,
                             expiry=expiry,
                             problems=tuple(problems))


class CertificateInspector(object):
    def __init__(self, renew_alert_days=constants.DEFAULT_EXPIRES,
                 port=constants.DEFAULT_PORT, timeout=None,
                 fetch=None):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._renew_alert_days = renew_alert_days
        self._port = port
        self._timeout = timeout
        self._fetch = fetch if fetch is not None else scanner.fetch_certificate

    def get_fields(self, domain):
        try:
            cert = self._fetch(domain, port=self._port, timeout=self._timeout)
            if cert is None:
                self._logger.info("%s: server presented no certificate", domain)
                return None
            return read_certificate(cert)
        except Exception as exc:
            self._logger.info("%s: unable to retrieve certificate: %s", domain, exc)
            return None

    def inspect(self, domain, now=None):
        if now is None:
            now = datetime.now(timezone.utc)
        fields = self.get_fields(domain)
        self._logger.debug("%s: %r", domain, fields)
        record = classify(domain, fields, self._renew_alert_days, now)
        if record.problems:
            self._logger.info("%s: %s", domain, ', '.join(record.problems))
        return record

    def inspect_all(self, domains, now=None):
        """ Yields one CertificateRecord per non-blank domain, in input order """
        for domain in domains:
            domain = domain.strip()
            if not domain:
                continue
            yield self.inspect(domain, now=now)
