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



from io import BytesIO

from lxml import etree


class AuthCredentials(object):
    """
    Who is depositing: the authenticated user name and, for mediated
    deposits, the user on whose behalf the deposit is made.
    """

    def __init__(self, username, on_behalf_of=None):
        self.username = username
        self.on_behalf_of = on_behalf_of

    def __repr__(self):
        return '<AuthCredentials %s (on behalf of %s)>' % (self.username, self.on_behalf_of)


class Deposit(object):
    """
    What a client sent in one request.

    The binary part is either a path to a (temporary) file in ``file`` or
    the raw bytes in ``content``. The Atom entry, if any, is an lxml
    element in ``entry``. A deposit with both parts is a multipart deposit.
    """

    def __init__(self, mime_type=None, packaging=None, filename=None, slug=None,
                 file=None, content=None, entry=None, in_progress=False):
        self.mime_type = mime_type
        self.packaging = packaging
        self.filename = filename
        self.slug = slug
        self.file = file
        self.content = content
        self.entry = entry
        self.in_progress = in_progress

    @property
    def has_binary(self):
        return self.file is not None or self.content is not None

    @property
    def entry_only(self):
        return self.entry is not None and not self.has_binary

    @property
    def binary_only(self):
        return self.has_binary and self.entry is None

    @property
    def multipart(self):
        return self.has_binary and self.entry is not None

    def get_input_stream(self):
        """
        Opens a new binary stream on the deposited content.
        The caller is responsible for closing it.
        """
        if self.file is not None:
            return open(self.file, 'rb')
        if self.content is not None:
            return BytesIO(self.content)
        raise ValueError('This deposit carries no binary content')

    def entry_text(self):
        """
        The Atom entry serialized as text
        """
        return etree.tostring(self.entry, encoding='unicode')

    def __repr__(self):
        return '<Deposit %s, %s>' % (self.mime_type, self.packaging)


class DepositResult(object):
    """
    Small object containing the result of an ingest.

    ``original_deposit`` is the bitstream designated as what the client
    sent. Ingesters may set it, otherwise storing the originals does.
    """

    def __init__(self, item, original_deposit=None, treatment=None):
        self.item = item
        self.original_deposit = original_deposit
        self.derived_resources = []
        self.treatment = treatment


class VerboseDescription(object):
    """
    Human readable account of what happened during a deposit,
    sent back in the deposit receipt.
    """

    def __init__(self):
        self._lines = []

    def append(self, line):
        """
        Logs a line in the description.
        """
        self._lines.append(line)

    def __str__(self):
        return '\n'.join(self._lines)
