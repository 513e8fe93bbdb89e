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



from datetime import datetime
from datetime import timezone

TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%S'


def _timestamped_name(original):
    fn = 'sword-' + datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)
    if original:
        fn += '.original'
    return fn


class FilenamePolicy(object):
    """
    Names the files we store for a deposit when the client gave us no name.
    """

    def __init__(self, storage):
        self.storage = storage

    def create_filename(self, deposit, original):
        """
        Construct the most appropriate filename for the incoming deposit.

        :param deposit: deposit request
        :param original: use the ".original" filename suffix?
        :returns: the filename sent by the client if any, otherwise
            ``sword-<UTC timestamp>[.original][.<extension>]``
        """
        if deposit.filename:
            return deposit.filename

        fn = _timestamped_name(original)
        bf = self.storage.find_format(deposit.mime_type)
        if bf is not None and bf.extension_list:
            fn += '.' + bf.extension_list[0]
        return fn

    def create_entry_filename(self, deposit, original):
        """
        Filename of a stored Atom entry. The client filename is never used:
        it names the binary part of the deposit.
        """
        return _timestamped_name(original) + '.xml'
