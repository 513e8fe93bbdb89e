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
import os
import re
import shutil
import tempfile

from django.conf import settings
from django.db import transaction
from django.http import FileResponse
from django.http import HttpResponse
from django.http import HttpResponseForbidden
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.utils.translation import gettext as _
from django.views.decorators.csrf import csrf_exempt
from django.views.generic import View
from lxml import etree

from sword2.api import DEPOSIT_DESCRIPTION
from sword2.api import SwordAPI
from sword2.context import SwordContext
from sword2.deposit import AuthCredentials
from sword2.deposit import Deposit
from sword2.deposit import VerboseDescription
from sword2.documents import RECEIPT_CONTENT_TYPES
from sword2.documents import DepositReceipt
from sword2.documents import error_document
from sword2.errors import ERROR_BAD_REQUEST
from sword2.errors import ERROR_CONTENT
from sword2.errors import AuthorizeError
from sword2.errors import DumpFailure
from sword2.errors import SwordError
from sword2.errors import SwordServerError
from sword2.ingesters import ingest
from sword2.models import Item

logger = logging.getLogger('swordserver.' + __name__)

content_disposition_filename_re = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)

ERROR_CONTENT_TYPE = 'application/xml'

# Entries come from clients: no entity expansion, no network access
ENTRY_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def filename_from_content_disposition(value):
    """
    Extracts the filename of a Content-Disposition header, or ``None``
    """
    if not value:
        return None
    match = content_disposition_filename_re.search(value)
    if match:
        return match.group(1).strip()
    return None


def error_response(error_uri, summary, status):
    return HttpResponse(error_document(error_uri, summary),
                        content_type=ERROR_CONTENT_TYPE, status=status)


@method_decorator(csrf_exempt, name='dispatch')
class SwordView(View):
    """
    Base class of SWORD endpoints. Takes care of authentication and turns
    SWORD errors into error documents.
    """

    api_class = SwordAPI

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            response = HttpResponse(status=401)
            response['WWW-Authenticate'] = 'Basic realm="SWORD"'
            return response

        self.api = self.api_class()
        on_behalf_of = self.api.get_header(request.headers, 'On-Behalf-Of')
        self.context = SwordContext(request.user, on_behalf_of)
        self.auth = AuthCredentials(request.user.get_username(), on_behalf_of)
        try:
            return super().dispatch(request, *args, **kwargs)
        except SwordError as e:
            logger.info('SWORD error for %s: %s', self.auth.username, e.message)
            return error_response(e.error_uri, e.message, e.status)
        except AuthorizeError:
            return HttpResponseForbidden(_('You may not deposit on this item.'))

    def negotiate(self, available):
        """
        Chooses the content type to answer with among ``available``.
        Without Accept header, the first one is chosen.

        :returns: a content type or ``None`` if the client accepts none of them
        """
        accept = self.api.analyse_accept(self.api.get_header(self.request.headers, 'Accept'))
        if accept is None:
            return available[0]
        return accept.best_match(available)

    def receipt_content_type(self, deposit=None):
        """
        Negotiates the type of the receipt. Deposits are answered with an
        Atom entry when the client accepts no receipt type.
        """
        content_type = self.negotiate(RECEIPT_CONTENT_TYPES)
        if content_type is None:
            if deposit is None:
                raise SwordError(ERROR_CONTENT, _('No acceptable representation of the receipt.'), status=406)
            content_type = RECEIPT_CONTENT_TYPES[0]
        return content_type

    def receipt_response(self, item, deposit=None, result=None, verbose_description=None,
                         status=200, content_type=None):
        if content_type is None:
            content_type = self.receipt_content_type(deposit)

        edit_iri = self.request.build_absolute_uri(reverse('sword2-edit', args=[item.pk]))
        edit_media_iri = self.request.build_absolute_uri(reverse('sword2-edit-media', args=[item.pk]))
        receipt = DepositReceipt(item, edit_iri, edit_media_iri,
                                 packaging=deposit.packaging if deposit else None)
        if result is not None:
            receipt.treatment = result.treatment
            if result.original_deposit is not None:
                receipt.set_original_deposit(edit_media_iri, result.original_deposit.mimetype)
        if verbose_description is not None:
            self.api.add_verbose_description(receipt, verbose_description)

        response = HttpResponse(receipt.serialize(), content_type=content_type, status=status)
        if status == 201:
            response['Location'] = edit_iri
        return response

    def deposit_headers(self):
        headers = self.request.headers
        return {
            'mime_type': self.api.get_header(headers, 'Content-Type'),
            'packaging': self.api.get_header(headers, 'Packaging'),
            'filename': filename_from_content_disposition(
                self.api.get_header(headers, 'Content-Disposition')),
            'slug': self.api.get_header(headers, 'Slug'),
            'in_progress': self.api.get_header(headers, 'In-Progress', 'false').lower() == 'true',
        }

    def do_deposit(self, item, deposit):
        """
        Checks, ingests and keeps the originals of a deposit, then answers
        with a receipt. Ingest and originals are stored in one transaction.
        """
        # A malformed Accept header is rejected before anything is stored
        content_type = self.receipt_content_type(deposit)
        self.api.is_acceptable(self.context, deposit, item)
        self.context.authorise(item, 'change')

        verbose_description = VerboseDescription()
        try:
            with transaction.atomic():
                result = ingest(self.api.storage, self.api.filenames,
                                self.context, deposit, item, verbose_description)
                self.api.store_originals(self.context, verbose_description, deposit, result)
        except SwordServerError as e:
            logger.error('Deposit of %s on item %s failed: %s', self.auth.username, item.pk, e.__cause__)
            self.keep_failed_deposit(deposit)
            return HttpResponse(_('The deposit could not be stored, please try again later.'),
                                content_type='text/plain', status=500)

        logger.info('Deposit of %s on item %s stored', self.auth.username, item.pk)
        return self.receipt_response(item, deposit, result, verbose_description,
                                     status=201, content_type=content_type)

    def keep_failed_deposit(self, deposit):
        """
        Writes a failed deposit to disk, if configured to do so.
        Failing to do so is logged, not raised.
        """
        if not self.api.config.keep_package_on_fail:
            return
        try:
            if deposit.has_binary:
                self.api.store_package_as_file(deposit, self.auth)
            else:
                self.api.store_entry_as_file(deposit, self.auth)
        except DumpFailure:
            logger.exception('Could not keep the failed deposit of %s', self.auth.username)


class MediaResourceView(SwordView):
    """
    The media resource of an item: binary deposits are POSTed here,
    GET returns the original deposit.
    """

    def get(self, request, pk):
        item = get_object_or_404(Item.objects, pk=pk)
        bundle = item.get_bundle(self.api.config.bundle_name)
        bitstream = None
        if bundle is not None:
            bitstream = bundle.bitstreams.filter(description=DEPOSIT_DESCRIPTION).last()
        if bitstream is None:
            return error_response(ERROR_BAD_REQUEST, _('This item has no original deposit.'), 404)

        if self.negotiate([bitstream.mimetype]) is None:
            raise SwordError(ERROR_CONTENT, _('No acceptable representation of the media resource.'), status=406)

        return FileResponse(bitstream.file.open('rb'), as_attachment=True,
                            filename=bitstream.name, content_type=bitstream.mimetype)

    def post(self, request, pk):
        item = get_object_or_404(Item.objects, pk=pk)

        # The body is spooled to disk so that large packages are not held in memory
        tmp = tempfile.NamedTemporaryFile(delete=False, dir=getattr(settings, 'FILE_UPLOAD_TEMP_DIR', None))
        try:
            with tmp:
                shutil.copyfileobj(request, tmp)
            deposit = Deposit(file=tmp.name, **self.deposit_headers())
            return self.do_deposit(item, deposit)
        finally:
            os.remove(tmp.name)


class EntryView(SwordView):
    """
    The edit IRI of an item: Atom entries are POSTed here,
    GET returns the receipt of the item.
    """

    def get(self, request, pk):
        item = get_object_or_404(Item.objects, pk=pk)
        return self.receipt_response(item)

    def post(self, request, pk):
        item = get_object_or_404(Item.objects, pk=pk)
        try:
            entry = etree.fromstring(request.body, ENTRY_PARSER)
        except etree.XMLSyntaxError:
            raise SwordError(ERROR_BAD_REQUEST, _('The Atom entry is not valid XML.'))
        deposit = Deposit(entry=entry, **self.deposit_headers())
        return self.do_deposit(item, deposit)
