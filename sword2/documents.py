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
XML documents sent back to SWORD clients: deposit receipts and error documents.
"""

from django.utils import timezone
from lxml import etree

# Namespaces
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
SWORD_NAMESPACE = "http://purl.org/net/sword/terms/"
DCTERMS_NAMESPACE = "http://purl.org/dc/terms/"

ATOM = "{%s}" % ATOM_NAMESPACE
SWORD = "{%s}" % SWORD_NAMESPACE

NSMAP = {
    None : ATOM_NAMESPACE,
    'sword' : SWORD_NAMESPACE,
    'dcterms' : DCTERMS_NAMESPACE,
}

#: Content types in which receipts can be served, preferred first
RECEIPT_CONTENT_TYPES = ['application/atom+xml;type=entry', 'application/xml']


class DepositReceipt(object):
    """
    The receipt of a deposit on an item, rendered as an Atom entry
    """

    def __init__(self, item, edit_iri, edit_media_iri, packaging=None):
        self.item = item
        self.edit_iri = edit_iri
        self.edit_media_iri = edit_media_iri
        self.packaging = packaging
        self.original_deposit_iri = None
        self.original_deposit_type = None
        self.treatment = None
        self.verbose_description = None

    def set_original_deposit(self, iri, mime_type):
        self.original_deposit_iri = iri
        self.original_deposit_type = mime_type

    def to_xml(self):
        """
        :returns: the receipt as lxml element
        """
        entry = etree.Element(ATOM + 'entry', nsmap=NSMAP)

        etree.SubElement(entry, ATOM + 'id').text = self.edit_iri
        etree.SubElement(entry, ATOM + 'title').text = self.item.title
        etree.SubElement(entry, ATOM + 'updated').text = timezone.now().isoformat()

        etree.SubElement(entry, ATOM + 'link', rel='edit', href=self.edit_iri)
        etree.SubElement(entry, ATOM + 'link', rel='edit-media', href=self.edit_media_iri)
        if self.original_deposit_iri:
            link = etree.SubElement(entry, ATOM + 'link',
                                    rel=SWORD_NAMESPACE + 'originalDeposit',
                                    href=self.original_deposit_iri)
            if self.original_deposit_type:
                link.set('type', self.original_deposit_type)

        if self.packaging:
            etree.SubElement(entry, SWORD + 'packaging').text = self.packaging
        if self.treatment:
            etree.SubElement(entry, SWORD + 'treatment').text = self.treatment
        if self.verbose_description:
            etree.SubElement(entry, SWORD + 'verboseDescription').text = self.verbose_description

        return entry

    def serialize(self):
        return etree.tostring(self.to_xml(), pretty_print=True, encoding='utf-8', xml_declaration=True)


def error_document(error_uri, summary, verbose_description=None):
    """
    Creates a SWORD error document

    :param error_uri: the SWORD error URI
    :param summary: human readable explanation
    :returns: the document as bytes
    """
    error = etree.Element(SWORD + 'error', nsmap=NSMAP, href=error_uri)
    etree.SubElement(error, ATOM + 'title').text = 'ERROR'
    etree.SubElement(error, ATOM + 'updated').text = timezone.now().isoformat()
    etree.SubElement(error, ATOM + 'summary').text = summary
    if verbose_description:
        etree.SubElement(error, SWORD + 'verboseDescription').text = verbose_description
    return etree.tostring(error, pretty_print=True, encoding='utf-8', xml_declaration=True)
