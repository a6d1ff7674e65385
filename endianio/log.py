#!/usr/bin/env python3
import logging


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

log = logging.getLogger('endianio')


def setup_logging(level: int = logging.DEBUG) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
