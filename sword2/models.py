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



import os

from uuid import uuid4

from django.conf import settings
from django.contrib.auth.models import User
from django.db import models
from django.utils.translation import gettext_lazy as _


#: Name of the bundle holding the ingested content of an item
ORIGINAL_BUNDLE = 'ORIGINAL'


class Item(models.Model):
    """
    An item of the repository, the target of SWORD deposits.
    Its content lives in named :class:`Bundle` objects.
    """
    #: Title, updated from deposited Atom entries
    title = models.CharField(max_length=1024, blank=True, default='')
    #: The user who owns the item and may add content to it
    owner = models.ForeignKey(User, on_delete=models.CASCADE)
    #: Last modification
    last_modified = models.DateTimeField(auto_now=True)

    def get_item(self):
        return self

    def get_bundle(self, name):
        """
        Returns the bundle with the given name, or ``None``
        """
        return self.bundles.filter(name=name).first()

    def __str__(self):
        return self.title or str(_('Item %d') % self.pk)


class Bundle(models.Model):
    """
    A named group of bitstreams inside an item, such as ``ORIGINAL``
    for ingested files or ``SWORD`` for the original deposits.
    There is at most one bundle of a given name per item.
    """
    item = models.ForeignKey(Item, related_name='bundles', on_delete=models.CASCADE)
    name = models.CharField(max_length=64)
    last_modified = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('item', 'name')

    def get_item(self):
        return self.item

    def __str__(self):
        return self.name


class BitstreamFormatManager(models.Manager):
    """
    Manager for BitstreamFormat
    """
    def find_by_mimetype(self, mimetype):
        """
        Fetches the format registered for a MIME type
        :param mimetype: MIME type, parameters are ignored
        :returns: BitstreamFormat or ``None`` if the type is unknown
        """
        if not mimetype:
            return None
        mimetype = mimetype.split(';')[0].strip().lower()
        return self.filter(mimetype=mimetype).first()


class BitstreamFormat(models.Model):
    """
    A file format known to the repository
    """
    #: The MIME type, without parameters
    mimetype = models.CharField(max_length=255, unique=True)
    #: Human readable name
    short_description = models.CharField(max_length=128)
    #: Comma separated list of file extensions, the first one is preferred
    extensions = models.CharField(max_length=255, blank=True, default='')

    objects = BitstreamFormatManager()

    @property
    def extension_list(self):
        """
        Returns the extensions as list
        """
        return [e.strip() for e in self.extensions.split(',') if e.strip()]

    def __str__(self):
        return self.short_description


def bitstream_upload_to(instance, filename):
    """
    Bitstreams are stored under a random name, the user facing
    name is kept in the ``name`` field
    """
    return os.path.join('bitstreams', uuid4().hex)


class Bitstream(models.Model):
    """
    A stored file, as part of a bundle
    """
    bundle = models.ForeignKey(Bundle, related_name='bitstreams', on_delete=models.CASCADE)
    #: The file name as presented to users
    name = models.CharField(max_length=1024, blank=True, default='')
    description = models.TextField(blank=True, default='')
    #: Format of the file, ``None`` when the format is unknown
    format = models.ForeignKey(BitstreamFormat, null=True, blank=True, on_delete=models.SET_NULL)
    #: Position in the bundle
    sequence = models.PositiveIntegerField(default=0)
    #: The file itself
    file = models.FileField(upload_to=bitstream_upload_to)
    size_bytes = models.BigIntegerField(default=0)
    #: MD5 checksum of the content
    checksum = models.CharField(max_length=32, blank=True, default='')
    created = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['bundle', 'sequence']

    def get_item(self):
        return self.bundle.item

    @property
    def mimetype(self):
        """
        The MIME type of the bitstream, as far as we know it
        """
        if self.format is not None:
            return self.format.mimetype
        return 'application/octet-stream'

    @property
    def absolute_path(self):
        """
        Returns the full path to the file as property
        :returns: full path to file
        """
        return os.path.join(settings.MEDIA_ROOT, self.file.name)

    def __str__(self):
        return self.name

    def __repr__(self):
        return '<Bitstream %s>' % str(self.name)
