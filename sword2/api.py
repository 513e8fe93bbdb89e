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



import logging

from io import BytesIO

from django.db import DatabaseError

from sword2.config import SwordConfiguration
from sword2.dumper import FailureDumper
from sword2.errors import AuthorizeError
from sword2.errors import SwordServerError
from sword2.errors import UnacceptableContentType
from sword2.errors import UnacceptablePackaging
from sword2.filenames import FilenamePolicy
from sword2.negotiation import analyse_accept
from sword2.negotiation import get_header
from sword2.storage import ContentStorage

logger = logging.getLogger('swordserver.' + __name__)

ENTRY_DESCRIPTION = 'Original SWORD entry document'
DEPOSIT_DESCRIPTION = 'Original SWORD deposit file'


class SwordAPI(object):
    """
    The deposit operations shared by the SWORD endpoints.
    Collaborators are passed in, defaults are built from the settings.
    """

    def __init__(self, config=None, storage=None, filenames=None, dumper=None):
        self.config = config or SwordConfiguration()
        self.storage = storage or ContentStorage()
        self.filenames = filenames or FilenamePolicy(self.storage)
        self.dumper = dumper or FailureDumper(self.config)

    get_header = staticmethod(get_header)
    analyse_accept = staticmethod(analyse_accept)

    def is_acceptable(self, context, deposit, target):
        """
        Checks the content type, then the packaging of a deposit against
        the policy for ``target``. Stops at the first failure.

        :raises UnacceptableContentType: if the content type is refused
        :raises UnacceptablePackaging: if the packaging is refused
        """
        if not self.config.is_acceptable_content_type(context, deposit.mime_type, target):
            logger.error('Unacceptable content type detected: %s for object %s',
                         deposit.mime_type, target.pk)
            raise UnacceptableContentType(deposit.mime_type, target)

        if not self.config.is_accepted_packaging(deposit.packaging, target):
            logger.error('Unacceptable packaging type detected: %s for object %s',
                         deposit.packaging, target.pk)
            raise UnacceptablePackaging(deposit.packaging, target)

    def store_originals(self, context, verbose_description, deposit, result):
        """
        Keeps what the client sent in the SWORD bundle of the item, if the
        configuration asks for it. The entry and the binary part are stored
        separately. The stored binary becomes the original deposit of
        ``result`` unless an ingester already designated one.

        Nothing is rolled back on failure: the caller owns the transaction.

        :raises SwordServerError: if storing failed
        """
        if not self.config.keep_original:
            return

        verbose_description.append(
            'The server will store an original copy of the deposit, '
            'as well as ingesting the item into the archive')

        item = result.item
        try:
            # the depositor may not be allowed to write in the SWORD bundle
            with context.ignore_authorisation():
                bundle = self.storage.find_or_create_bundle(context, item, self.config.bundle_name)

                if deposit.multipart or deposit.entry_only:
                    fn = self.filenames.create_entry_filename(deposit, True)
                    entry = deposit.entry_text().encode('utf-8')
                    self._store_original(context, bundle, BytesIO(entry), fn,
                                         ENTRY_DESCRIPTION, 'application/xml')
                    verbose_description.append(
                        'Original entry stored as %s, in item bundle %s' % (fn, bundle))

                if deposit.multipart or deposit.binary_only:
                    fn = self.filenames.create_filename(deposit, True)
                    with deposit.get_input_stream() as stream:
                        bitstream = self._store_original(context, bundle, stream, fn,
                                                         DEPOSIT_DESCRIPTION, deposit.mime_type)
                    if result.original_deposit is None:
                        result.original_deposit = bitstream
                    verbose_description.append(
                        'Original deposit stored as %s, in item bundle %s' % (fn, bundle))

                self.storage.update_bundle(context, bundle)
                self.storage.update_item(context, item)
        except (DatabaseError, AuthorizeError, OSError) as e:
            logger.exception('Storing the original deposit of item %s failed', item.pk)
            raise SwordServerError('Could not store the original deposit') from e

    def _store_original(self, context, bundle, stream, name, description, mime_type):
        bitstream = self.storage.create_bitstream(context, bundle, stream)
        bitstream.name = name
        bitstream.description = description
        bitstream.format = self.storage.find_format(mime_type)
        self.storage.update_bitstream(context, bitstream)
        return bitstream

    def store_package_as_file(self, deposit, auth):
        """
        Writes the package and its headers to the failed package directory
        """
        return self.dumper.store_package_as_file(deposit, auth)

    def store_entry_as_file(self, deposit, auth):
        """
        Writes the entry and its headers to the failed package directory
        """
        return self.dumper.store_entry_as_file(deposit, auth)

    def add_verbose_description(self, receipt, verbose_description):
        if self.config.verbose_description_receipt:
            receipt.verbose_description = str(verbose_description)
