from gevent.monkey import patch_all
patch_all()  # noqa: E402

import logging

from gevent.pywsgi import WSGIServer
from showdown import config
from showdown.api import app


logging.basicConfig(level=config.LOG_LEVEL)


def main():
    server = WSGIServer(config.listen_address(), app)
    server.serve_forever()


if __name__ == '__main__':
    main()
