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
Ingesters turn a deposit into content of an item.

Binary content is handled by the ingester registered for the packaging
of the deposit in :data:`ingester_registry`; Atom entries are handled by
:class:`EntryIngester`.
"""

import logging
import mimetypes
import os
import zlib

from zipfile import BadZipFile
from zipfile import ZipFile

from django.db import DatabaseError
from django.utils.translation import gettext as _
from lxml import etree

from sword2.config import PACKAGE_BINARY
from sword2.config import PACKAGE_SIMPLE_ZIP
from sword2.deposit import DepositResult
from sword2.documents import ATOM
from sword2.errors import ERROR_CONTENT
from sword2.errors import AuthorizeError
from sword2.errors import SwordError
from sword2.errors import SwordServerError
from sword2.models import ORIGINAL_BUNDLE

logger = logging.getLogger('swordserver.' + __name__)


class IngesterRegistry(object):
    """
    Maps packaging URIs to ingester classes
    """

    def __init__(self):
        self.dct = {}

    def get(self, *args, **kwargs):
        return self.dct.get(*args, **kwargs)

    def register(self, cls):
        self.dct[cls.packaging] = cls
        return cls

ingester_registry = IngesterRegistry()


class Ingester(object):
    """
    Base class of ingesters. Subclasses store what they find in the
    deposit and record it in the :class:`~deposit.DepositResult`.
    """

    #: The packaging URI handled by the ingester
    packaging = None

    def __init__(self, storage, filenames):
        self.storage = storage
        self.filenames = filenames

    def ingest(self, context, deposit, result, verbose_description):
        raise NotImplementedError(
            'ingest should be implemented in the Ingester subclass.')

    def _store(self, context, bundle, stream, name, mime_type):
        bitstream = self.storage.create_bitstream(context, bundle, stream)
        bitstream.name = name
        bitstream.format = self.storage.find_format(mime_type)
        self.storage.update_bitstream(context, bitstream)
        return bitstream


@ingester_registry.register
class BinaryIngester(Ingester):
    """
    Stores the deposit as it is, as a single file
    """

    packaging = PACKAGE_BINARY

    def ingest(self, context, deposit, result, verbose_description):
        bundle = self.storage.find_or_create_bundle(context, result.item, ORIGINAL_BUNDLE)
        name = self.filenames.create_filename(deposit, False)
        with deposit.get_input_stream() as stream:
            bitstream = self._store(context, bundle, stream, name, deposit.mime_type)

        result.derived_resources.append(bitstream)
        result.original_deposit = bitstream
        result.treatment = _('The file has been added to the item without change.')
        verbose_description.append('Deposit stored as %s, in item bundle %s' % (name, bundle))


@ingester_registry.register
class SimpleZipIngester(Ingester):
    """
    Unpacks a zip archive, each file of the archive becomes a bitstream
    """

    packaging = PACKAGE_SIMPLE_ZIP

    def ingest(self, context, deposit, result, verbose_description):
        bundle = self.storage.find_or_create_bundle(context, result.item, ORIGINAL_BUNDLE)
        try:
            with deposit.get_input_stream() as stream, ZipFile(stream) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    name = os.path.basename(info.filename)
                    mime_type, _encoding = mimetypes.guess_type(name)
                    with archive.open(info) as member:
                        bitstream = self._store(context, bundle, member, name, mime_type)
                    result.derived_resources.append(bitstream)
                    verbose_description.append('Unpacked %s into item bundle %s' % (name, bundle))
        except (BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError):
            # corrupt member data, encrypted members or unsupported compression
            logger.error('Corrupt zip file deposited on item %s', result.item.pk)
            raise SwordError(ERROR_CONTENT, _('The deposited file is not a valid zip archive.'))

        result.treatment = _('The zip archive has been unpacked, each file was added to the item.')


class EntryIngester(Ingester):
    """
    Copies the metadata of an Atom entry to the item
    """

    def ingest(self, context, deposit, result, verbose_description):
        title = deposit.entry.findtext(ATOM + 'title')
        if title:
            result.item.title = title.strip()
            verbose_description.append('Item title set to "%s"' % result.item.title)
        self.storage.update_item(context, result.item)


def ingest(storage, filenames, context, deposit, item, verbose_description):
    """
    Ingests a deposit on an item.

    :returns: a DepositResult
    :raises SwordError: if the packaging is not supported or the content is invalid
    :raises SwordServerError: if storing the content failed
    """
    result = DepositResult(item)
    try:
        if deposit.entry is not None:
            EntryIngester(storage, filenames).ingest(context, deposit, result, verbose_description)
        if deposit.has_binary:
            cls = ingester_registry.get(deposit.packaging or PACKAGE_BINARY)
            if cls is None:
                raise SwordError(ERROR_CONTENT,
                                 _('No ingester for packaging %s') % deposit.packaging,
                                 status=415)
            cls(storage, filenames).ingest(context, deposit, result, verbose_description)
    except (DatabaseError, AuthorizeError, OSError, etree.LxmlError) as e:
        logger.error('Ingest on item %s failed: %s', item.pk, e)
        raise SwordServerError('Ingest failed') from e
    return result
