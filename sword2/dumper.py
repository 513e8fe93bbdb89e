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
Keeps deposits that could not be ingested on disk, along with the
headers they came with, so that they can be recovered by hand.
"""

import logging
import os
import shutil
import time

from io import BytesIO

from sword2.errors import DumpFailure

logger = logging.getLogger('swordserver.' + __name__)

#: Keys of the companion headers file, in the order they are written
HEADER_KEYS = ['Filename', 'Content-Type', 'Packaging', 'On Behalf of', 'Slug', 'User name']


class FailureDumper(object):
    """
    Writes failed deposits to the directory given by the configuration
    """

    def __init__(self, config):
        self.config = config

    def _prepare(self, auth):
        """
        Checks the target directory and returns the path of the dump,
        without the ``-headers`` suffix
        """
        path = self.config.failed_package_dir
        if not path or not os.path.isdir(path):
            raise DumpFailure('Directory does not exist for writing packages on ingest error: %s' % path)
        filename_base = 'sword-%s-%d' % (auth.username, int(time.time() * 1000))
        return os.path.join(path, filename_base)

    @staticmethod
    def _headers(deposit, auth):
        values = [
            deposit.filename,
            deposit.mime_type,
            deposit.packaging,
            auth.on_behalf_of,
            deposit.slug,
            auth.username,
        ]
        return ''.join('%s=%s\n' % (key, '' if value is None else value)
                       for key, value in zip(HEADER_KEYS, values))

    def _dump(self, deposit, auth, open_stream):
        base = self._prepare(auth)
        try:
            with open_stream() as stream, open(base, 'xb') as f:
                shutil.copyfileobj(stream, f)
            with open(base + '-headers', 'x', encoding='utf-8') as f:
                f.write(self._headers(deposit, auth))
        except OSError as e:
            logger.error('Could not write failed deposit to %s: %s', base, e)
            raise DumpFailure('Could not write failed deposit to %s' % base) from e
        logger.info('Failed deposit of %s written to %s', auth.username, base)
        return base

    def store_package_as_file(self, deposit, auth):
        """
        Stores the binary content of the deposit and a companion file
        containing its headers.

        :returns: the path of the package file
        :raises DumpFailure: if the directory is missing, writing fails or a
            dump of the same name exists
        """
        return self._dump(deposit, auth, deposit.get_input_stream)

    def store_entry_as_file(self, deposit, auth):
        """
        Stores the Atom entry of the deposit and a companion file
        containing its headers.

        :returns: the path of the entry file
        :raises DumpFailure: if the directory is missing, writing fails or a
            dump of the same name exists
        """
        entry = deposit.entry_text().encode('utf-8')
        return self._dump(deposit, auth, lambda: BytesIO(entry))
