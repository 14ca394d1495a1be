#!/usr/bin/env python3
"""Launch the time stretcher from the project root.

Usage:
    uv run python main.py input.wav output.wav --factor 2.0
    uv run python -m vocoder.main input.wav output.wav --algorithm paul-stretch --factor 8
"""

from vocoder.main import main

if __name__ == "__main__":
    main()
