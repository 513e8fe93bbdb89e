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

from contextlib import contextmanager

from sword2.errors import AuthorizeError

logger = logging.getLogger('swordserver.' + __name__)


class SwordContext(object):
    """
    Request scoped state of a deposit: the authenticated user, the user the
    deposit is made on behalf of, and whether authorisation checks are on.
    """

    def __init__(self, user, on_behalf_of=None):
        self.user = user
        self.on_behalf_of = on_behalf_of
        self._ignore_depth = 0

    @property
    def ignoring_authorisation(self):
        return self._ignore_depth > 0

    @contextmanager
    def ignore_authorisation(self):
        """
        Suspends authorisation checks for the duration of the ``with``
        block. The previous state is restored however the block exits.
        Guards may be nested.
        """
        self._ignore_depth += 1
        try:
            yield self
        finally:
            self._ignore_depth -= 1

    def is_authorised(self, obj, action):
        """
        Tells whether the context may perform ``action`` on ``obj``.
        Owners of an item may modify everything in it, other users need
        the corresponding model permission, e.g. ``sword2.add_bitstream``.
        """
        if self.ignoring_authorisation:
            return True
        user = self.user
        if user is None or not user.is_active:
            return False
        if user.is_superuser:
            return True
        if obj.get_item().owner_id == user.pk:
            return True
        return user.has_perm('sword2.%s_%s' % (action, obj._meta.model_name))

    def authorise(self, obj, action):
        """
        Raises :class:`AuthorizeError` if the context may not perform ``action`` on ``obj``
        """
        if not self.is_authorised(obj, action):
            logger.warning('User %s may not %s %r', self.user, action, obj)
            raise AuthorizeError('User %s may not %s %s %s' % (
                self.user, action, obj._meta.model_name, obj.pk))
