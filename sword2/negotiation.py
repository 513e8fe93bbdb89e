# -*- encoding: utf-8 -*-

# SWORD server: deposit negotiation and ingest engine
# Copyright (C) 2014 Antonin Delpeuch
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Affero General Public License
# as published by the Free Software Foundation; either version 2
# of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

"""
Content negotiation helpers.

:func:`analyse_accept` turns an ``Accept`` header into a :class:`QualityMap`,
keyed by quality value, in which every content type has a quality even when
the client gave none. Content types without an explicit ``q`` are placed
below the lowest explicit quality, in the order in which they were listed.
This differs from servers that rank unqualified types above every explicit
quality: in ``text/html, application/xml;q=0.9`` the XML type comes first.
For instance::

    >>> analyse_accept('application/zip, text/xml;q=0.5')
    QualityMap({0.5: frozenset({'text/xml'}), 0.333...: frozenset({'application/zip'})})
"""

import math
from collections import namedtuple
from collections.abc import Mapping

from sword2.errors import NegotiationMalformed


def get_header(headers, name, default=None):
    """
    Returns the value of a header, matching its name case-insensitively.

    :param headers: a mapping of header names to values
    :param name: the header to look up
    :param default: returned when no header matches
    """
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return default


#: One part of an Accept header. ``quality`` is ``None`` when the client gave no ``q``
AcceptPart = namedtuple('AcceptPart', ['position', 'content_type', 'params', 'quality'])


def _parse_quality(fragment):
    """
    Reads the value of a ``q=`` fragment
    """
    try:
        quality = float(fragment[2:])
    except ValueError:
        raise NegotiationMalformed(fragment)
    if not math.isfinite(quality) or quality < 0:
        raise NegotiationMalformed(fragment)
    return quality


def parse_accept_parts(accept):
    """
    Splits an Accept header into :data:`AcceptPart` tuples, in header order.
    A part is one of ``type``, ``type;q``, ``type;params`` or ``type;params;q``.
    """
    parts = []
    for position, part in enumerate(accept.split(','), start=1):
        components = [c.strip() for c in part.split(';')]
        content_type = components[0]
        extra = components[1:]
        quality = None
        # The quality is the last component, when it is one
        if extra and extra[-1].startswith('q='):
            quality = _parse_quality(extra.pop())
        params = ';'.join(extra) or None
        parts.append(AcceptPart(position, content_type, params, quality))
    return parts


class QualityMap(Mapping):
    """
    Read-only mapping from a quality value to the set of content types
    requested with that quality. Iteration goes from the most to the
    least preferred quality.
    """

    def __init__(self, entries=()):
        buckets = {}
        for quality, content_type in entries:
            buckets.setdefault(quality, set()).add(content_type)
        self._qualities = sorted(buckets, reverse=True)
        self._buckets = {q: frozenset(cts) for q, cts in buckets.items()}

    def __getitem__(self, quality):
        return self._buckets[quality]

    def __iter__(self):
        return iter(self._qualities)

    def __len__(self):
        return len(self._qualities)

    def __repr__(self):
        return 'QualityMap({%s})' % ', '.join(
            '%r: %r' % (q, self._buckets[q]) for q in self._qualities)

    def content_types(self):
        """
        All content types, most preferred first. The order among
        content types sharing a quality is unspecified.
        """
        return [ct for q in self._qualities for ct in self._buckets[q]]

    def best_match(self, available):
        """
        Returns the content type from ``available`` that the client prefers.
        ``available`` is the list of types the server can produce, in the
        order of the server's preference, which breaks ties between types
        the client rates equally.

        :returns: one of ``available``, or ``None`` if the client accepts none of them
        """
        for quality in self._qualities:
            requested = self._buckets[quality]
            for candidate in available:
                if any(media_range_matches(r, candidate) for r in requested):
                    return candidate
        return None


def _split_media_type(media_type):
    media_type, _, params = media_type.partition(';')
    maintype, _, subtype = media_type.strip().partition('/')
    return maintype.lower(), subtype.lower(), params.strip() or None


def media_range_matches(media_range, content_type):
    """
    Checks whether a requested media range such as ``*/*``, ``text/*`` or
    ``application/atom+xml;type=entry`` covers a content type.
    A missing parameter on either side matches any parameter.
    """
    rtype, rsub, rparams = _split_media_type(media_range)
    ctype, csub, cparams = _split_media_type(content_type)
    if rtype not in ('*', ctype):
        return False
    if rsub not in ('*', csub):
        return False
    return rparams is None or cparams is None or rparams == cparams


def analyse_accept(accept):
    """
    Builds the :class:`QualityMap` of an Accept header.

    Explicit qualities are kept as they are. A content type listed without
    a quality gets an implicit one, strictly between 0 and the lowest
    explicit quality (1 when there is none), so that earlier types rank
    above later ones. A quality of 0 means the type is not acceptable and
    it is left out.

    :param accept: the value of the Accept header, or ``None``
    :returns: a :class:`QualityMap`, or ``None`` if there was no header
    :raises NegotiationMalformed: if a quality value is not a number
    """
    if accept is None:
        return None

    parts = parse_accept_parts(accept)
    total = len(parts)

    explicit = [p.quality for p in parts if p.quality is not None and p.quality > 0]
    ceiling = min(explicit + [1.0])

    entries = []
    for part in parts:
        content_type = part.content_type
        if part.params is not None:
            content_type += ';' + part.params

        if part.quality is None:
            quality = ceiling * (total - part.position + 1) / (total + 1)
        elif part.quality > 0:
            quality = part.quality
        else:
            continue
        entries.append((quality, content_type))

    return QualityMap(entries)
