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
Exceptions raised during a SWORD deposit.

Client errors are :class:`SwordError` instances: they carry the SWORD
error URI and the HTTP status under which they are reported.
Server side failures are wrapped in :class:`SwordServerError`.
"""

from django.utils.translation import gettext as _
from django.utils.translation import gettext_lazy

# Error URIs from the SWORDv2 profile
ERROR_BAD_REQUEST = 'http://purl.org/net/sword/error/ErrorBadRequest'
ERROR_CONTENT = 'http://purl.org/net/sword/error/ErrorContent'
ERROR_METHOD_NOT_ALLOWED = 'http://purl.org/net/sword/error/MethodNotAllowed'


class SwordError(Exception):
    """
    An error caused by the client request. It is terminal for the request
    and reported to the client as a SWORD error document.
    """

    def __init__(self, error_uri, message, status=400):
        super().__init__(message)
        self.error_uri = error_uri
        self.message = message
        self.status = status


class NegotiationMalformed(SwordError):
    """
    A fragment of an Accept header could not be understood
    """

    def __init__(self, fragment):
        super().__init__(
            ERROR_BAD_REQUEST,
            _('Malformed quality value in Accept header: %s') % fragment,
            status=400)
        self.fragment = fragment


class Unacceptable(SwordError):
    """
    The deposit does not comply with the policy of the target.
    Carries the offending value and the target.
    """

    message_template = None

    def __init__(self, value, target):
        super().__init__(
            ERROR_CONTENT,
            self.message_template % {'value': value, 'target': target.pk},
            status=415)
        self.value = value
        self.target = target


class UnacceptableContentType(Unacceptable):
    message_template = gettext_lazy('Unacceptable content type in deposit request: %(value)s (object %(target)s)')


class UnacceptablePackaging(Unacceptable):
    message_template = gettext_lazy('Unacceptable packaging type in deposit request: %(value)s (object %(target)s)')


class SwordServerError(Exception):
    """
    Wraps a storage or I/O failure that happened while handling a deposit.
    The original exception is available as ``__cause__``.
    """
    pass


class AuthorizeError(Exception):
    """
    Raised by the storage layer when the current context is not allowed
    to perform an action
    """
    pass


class DumpFailure(Exception):
    """
    Raised when a failed deposit could not be written to disk
    """
    pass
