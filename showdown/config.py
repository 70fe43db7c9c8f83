from os import environ

LISTEN_ADDR = environ.get("SHOWDOWN_LISTEN_ADDR", "0.0.0.0:6543")
LOG_LEVEL = environ.get("SHOWDOWN_LOG_LEVEL", "INFO").upper()


def listen_address(addr=None):
    host, _, port = (addr or LISTEN_ADDR).rpartition(":")
    if not host or not port.isdigit():
        raise ValueError("Listen address must look like host:port", addr)

    return host, int(port)
