import shlex
import logging
import subprocess

from . import constants


HEADER = ('Domain', 'Issued to', 'Valid until', 'Issued by', 'Possible issues')


def format_expiry(expiry):
    if expiry == constants.NO_VALUE:
        return expiry
    return expiry.strftime(constants.EXPIRY_FORMAT)


def record_fields(record):
    return (record.domain,
            record.issued_to,
            format_expiry(record.expiry),
            record.issuer,
            ', '.join(record.problems))


def align(rows, gap='  '):
    """ Renders rows of fields as whitespace-aligned columns """
    if not rows:
        return []
    ncols = max(len(row) for row in rows)
    widths = [0] * ncols
    for row in rows:
        for idx, field in enumerate(row):
            widths[idx] = max(widths[idx], len(field))
    return [gap.join(field.ljust(widths[idx]) for idx, field in enumerate(row)).rstrip()
            for row in rows]


def render_table(records, out=None):
    rows = [HEADER]
    rows.extend(record_fields(record) for record in records)
    for line in align(rows):
        print(line, file=out)


def render_problems(records, out=None):
    problematic = [record for record in records if record.problems]
    if problematic:
        render_table(problematic, out)


def renewal_domains(records):
    seen = set()
    domains = []
    for record in records:
        if constants.PROBLEM_NEAR_RENEWAL in record.problems and record.domain not in seen:
            seen.add(record.domain)
            domains.append(record.domain)
    return domains


def render_renewals(records, out=None):
    for domain in renewal_domains(records):
        print(domain, file=out)


def run_command(command, records, call=None):
    logger = logging.getLogger('COMMAND')
    call = call if call is not None else subprocess.call
    args = shlex.split(command)
    for domain in renewal_domains(records):
        logger.debug("Running %s for %s", repr(command), domain)
        status = call(args + [domain])
        if status:
            logger.warning("Command %s exited with status %d for %s",
                           repr(command), status, domain)
        else:
            logger.debug("Command %s succeeded for %s", repr(command), domain)


def render(config, records, out=None):
    mode = config.mode
    if mode is constants.ReportMode.renew:
        render_renewals(records, out)
    elif mode is constants.ReportMode.problems:
        render_problems(records, out)
    elif mode is constants.ReportMode.command:
        run_command(config.command, records)
    else:
        render_table(records, out)
