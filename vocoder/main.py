#!/usr/bin/env python3
"""Vocoder: phase vocoder and paulstretch time stretcher."""

import logging

from vocoder.audio.render import main as render_main

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")


def main():
    render_main()


if __name__ == "__main__":
    main()
