import socket

from OpenSSL import SSL

from . import constants


def make_context():
    # No peer verification: untrusted and expired leaf certificates
    # still have to be reported.
    context = SSL.Context(method=SSL.TLS_CLIENT_METHOD)
    context.set_verify(SSL.VERIFY_NONE)
    return context


def fetch_certificate(hostname, port=constants.DEFAULT_PORT, timeout=None):
    """ Performs single TLS handshake with hostname as SNI value and returns
    leaf certificate presented by server as cryptography x509.Certificate
    or None if server sent no certificate. Network and TLS errors are
    raised to caller. """
    context = make_context()
    sock = socket.create_connection((hostname, port), timeout=timeout)
    try:
        conn = SSL.Connection(context=context, socket=sock)
        conn.set_tlsext_host_name(hostname.encode('idna'))
        conn.set_connect_state()
        conn.setblocking(1)
        conn.do_handshake()
        cert = conn.get_peer_certificate()
    finally:
        sock.close()
    if cert is None:
        return None
    return cert.to_cryptography()
