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



from django.contrib import admin

from sword2.models import Bitstream
from sword2.models import BitstreamFormat
from sword2.models import Bundle
from sword2.models import Item


class BundleInline(admin.TabularInline):
    model = Bundle
    extra = 0

class BitstreamAdmin(admin.ModelAdmin):
    list_display = ('name', 'bundle', 'format', 'size_bytes')
    list_filter = ['bundle__name']
    raw_id_fields = ('bundle', )
    readonly_fields = ('created', 'checksum', 'size_bytes')
    search_fields = ('name', 'description')

class BitstreamFormatAdmin(admin.ModelAdmin):
    list_display = ('mimetype', 'short_description', 'extensions')
    search_fields = ('mimetype', 'short_description')

class ItemAdmin(admin.ModelAdmin):
    list_display = ('title', 'owner', 'last_modified')
    raw_id_fields = ('owner', )
    inlines = (BundleInline, )

admin.site.register(Bitstream, BitstreamAdmin)
admin.site.register(BitstreamFormat, BitstreamFormatAdmin)
admin.site.register(Item, ItemAdmin)
