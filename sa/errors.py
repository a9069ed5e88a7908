#! /usr/bin/env python3
"""
Errors that stop a run before any host is contacted.  Each is reported by
sa.main.main, which prints its message and exits non-zero.
"""

__all__ = ['SAError', 'ArgumentError', 'ConfigLoadError',
        'AmbiguousIdentifier', 'UnknownIdentifier', 'OperatorAbort']


class SAError(Exception):
    """
    Base class, str() of an instance is the message shown to the operator.
    """


class ArgumentError(SAError):

    def __init__(self, message, usage=''):
        super().__init__(message)
        self.usage = usage


class ConfigLoadError(SAError):

    def __init__(self, path):
        super().__init__('Could not load {}'.format(path))
        self.path = path


class AmbiguousIdentifier(SAError):
    """
    The identifier names a group and is also a host inside some group.
    """

    def __init__(self, identifier):
        super().__init__('"{}" is both section and host, exiting'.format(identifier))
        self.identifier = identifier


class UnknownIdentifier(SAError):

    def __init__(self, identifier):
        super().__init__('could not resolve "{}"'.format(identifier))
        self.identifier = identifier


class OperatorAbort(SAError):

    def __init__(self):
        super().__init__('Cancelled.. exiting')
