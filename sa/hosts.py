#! /usr/bin/env python3
import logging

from sa.errors import AmbiguousIdentifier, UnknownIdentifier

__all__ = ['resolve_hosts', 'remove_duplicates']
logger = logging.getLogger(__name__)


def remove_duplicates(items):
    """
    Drop every repeated item, keeping the first occurrence in its place.

        Example: ['a', 'b', 'a', 'c'] to ['a', 'b', 'c']
    """
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def resolve_hosts(groups, identifiers):
    """
    Turn a list of group names and hosts into the hosts to run on.

    A group name is replaced by its members, a host is kept.  Both are
    matched without regard to case.  Every group is checked for every
    identifier, so an identifier that is a group name and also a member of
    any group cannot be resolved.

    @param groups: The groups to resolve against.
    @type groups: list of sa.config.Group

    @param identifiers: Group names and hosts, in the order given.
    @type identifiers: list

    @raises AmbiguousIdentifier: An identifier is both a group and a host.
    @raises UnknownIdentifier: An identifier is neither a group nor a host.

    @returns: The hosts, without duplicates, in order of first appearance.
    @rtype: list
    """
    targets = []
    for identifier in identifiers:
        is_group = False
        is_host = False
        # Group names and hosts are both lowercased when loaded
        key = identifier.lower()

        for group in groups:
            if group.name == key:
                is_group = True
                targets.extend(group.members)
            if key in group.members:
                is_host = True
                targets.append(key)

        if is_group and is_host:
            raise AmbiguousIdentifier(identifier)
        elif is_group:
            logger.debug('resolving "%s": section', identifier)
        elif is_host:
            logger.debug('resolving "%s": host', identifier)
        else:
            raise UnknownIdentifier(identifier)

    return remove_duplicates(targets)
