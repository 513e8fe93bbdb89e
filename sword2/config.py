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
Deposit policy, read from the Django settings.
See ``swordserver/settings/common.py`` for the meaning of each setting.
"""

from django.conf import settings

from sword2.models import BitstreamFormat
from sword2.models import Item
from sword2.negotiation import media_range_matches

#: Packaging assumed when the client sends none
PACKAGE_BINARY = 'http://purl.org/net/sword/package/Binary'
PACKAGE_SIMPLE_ZIP = 'http://purl.org/net/sword/package/SimpleZip'

DEFAULT_BUNDLE_NAME = 'SWORD'


class SwordConfiguration(object):
    """
    The policy applied to deposits. Values are read from the settings
    each time, so that they can be changed at runtime (and in tests).
    """

    @property
    def bundle_name(self):
        """
        Name of the bundle holding original deposits
        """
        name = getattr(settings, 'SWORD2_BUNDLE_NAME', None)
        if not name:
            return DEFAULT_BUNDLE_NAME
        return name

    @property
    def keep_original(self):
        return getattr(settings, 'SWORD2_KEEP_ORIGINAL', True)

    @property
    def keep_package_on_fail(self):
        return getattr(settings, 'SWORD2_KEEP_PACKAGE_ON_FAIL', False)

    @property
    def failed_package_dir(self):
        return getattr(settings, 'SWORD2_FAILED_PACKAGE_DIR', None)

    @property
    def verbose_description_receipt(self):
        return getattr(settings, 'SWORD2_VERBOSE_DESCRIPTION_RECEIPT', True)

    @property
    def accepts(self):
        return list(getattr(settings, 'SWORD2_ACCEPTS', []))

    @property
    def accept_packaging(self):
        return list(getattr(settings, 'SWORD2_ACCEPT_PACKAGING', [PACKAGE_BINARY]))

    def is_acceptable_content_type(self, context, mime_type, target):
        """
        Tells whether a content type may be deposited on the target.
        Items additionally accept every format of the format registry
        if SWORD2_ACCEPT_REGISTERED_FORMATS is set.

        :param context: the SwordContext of the request
        :param mime_type: the declared content type
        :param target: the object receiving the deposit
        """
        if not mime_type:
            return False
        if any(media_range_matches(accepted, mime_type) for accepted in self.accepts):
            return True
        if isinstance(target, Item) and getattr(settings, 'SWORD2_ACCEPT_REGISTERED_FORMATS', False):
            return BitstreamFormat.objects.find_by_mimetype(mime_type) is not None
        return False

    def is_accepted_packaging(self, packaging, target):
        """
        Tells whether a packaging format may be deposited on the target.
        No packaging means Binary.
        """
        if not packaging:
            packaging = PACKAGE_BINARY
        return packaging in self.accept_packaging
