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
Persistence of items, bundles and bitstreams.

Every write checks the permissions of the :class:`~context.SwordContext`
it is given and raises :class:`~errors.AuthorizeError` when they are
missing. Nothing here opens a transaction: callers decide how much of a
deposit has to be atomic.
"""

import hashlib
import logging

from django.core.files import File
from django.db.models import Max

from sword2.models import Bitstream
from sword2.models import BitstreamFormat
from sword2.models import Bundle

logger = logging.getLogger('swordserver.' + __name__)


class ContentStorage(object):
    """
    Creates and updates the content of items
    """

    def find_bundle(self, item, name):
        """
        :returns: the bundle of ``item`` called ``name``, or ``None``
        """
        return item.get_bundle(name)

    def create_bundle(self, context, item, name):
        """
        Creates a new, empty bundle in an item
        """
        context.authorise(item, 'change')
        bundle = Bundle.objects.create(item=item, name=name)
        logger.debug('Created bundle %s in item %s', name, item.pk)
        return bundle

    def find_or_create_bundle(self, context, item, name):
        """
        Returns the bundle called ``name``, creating it if the item has none
        """
        bundle = self.find_bundle(item, name)
        if bundle is None:
            bundle = self.create_bundle(context, item, name)
        return bundle

    def find_format(self, mimetype):
        """
        :returns: the BitstreamFormat of a MIME type or ``None`` if it is unknown
        """
        return BitstreamFormat.objects.find_by_mimetype(mimetype)

    def create_bitstream(self, context, bundle, stream):
        """
        Stores the content of ``stream`` as a new bitstream at the end of
        ``bundle``. The stream is copied chunk by chunk and left open.
        """
        context.authorise(bundle, 'change')
        last = bundle.bitstreams.aggregate(Max('sequence'))['sequence__max']
        bitstream = Bitstream(
            bundle=bundle,
            sequence=0 if last is None else last + 1)
        bitstream.file.save('bitstream', File(stream), save=False)
        bitstream.size_bytes = bitstream.file.size
        bitstream.checksum = self._checksum(bitstream)
        bitstream.save()
        return bitstream

    @staticmethod
    def _checksum(bitstream):
        md5 = hashlib.md5()
        with bitstream.file.open('rb') as f:
            for chunk in f.chunks():
                md5.update(chunk)
        return md5.hexdigest()

    def update_bitstream(self, context, bitstream):
        context.authorise(bitstream, 'change')
        bitstream.save()

    def update_bundle(self, context, bundle):
        context.authorise(bundle, 'change')
        bundle.save()

    def update_item(self, context, item):
        context.authorise(item, 'change')
        item.save()
