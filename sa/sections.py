#! /usr/bin/env python3
"""
Print the sections of an ini-file as they are written, DEFAULT included.
sa itself lowercases the names and merges sections that only differ in case.
"""
import sys

from sa.config import load_sections
from sa.errors import ConfigLoadError

__all__ = ['main']


def main(args=None):
    args = sys.argv[1:] if args is None else args
    if len(args) != 1:
        print('[error] No file')
        sys.exit(1)

    try:
        sections = load_sections(args[0])
    except ConfigLoadError as e:
        print('[error] {}'.format(e))
        sys.exit(1)

    for section in sections:
        print('Section: {}'.format(section))


if __name__ == '__main__':
    main()
