#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging

from herohub import config
from herohub.app import app

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT, debug=False)
