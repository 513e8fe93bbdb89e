"""
This module provides the SWORDv2 deposit features of the server.
It is built around two central classes: :class:`~api.SwordAPI`
and :class:`~deposit.Deposit`.

A :class:`~deposit.Deposit` represents what a client sent us: a binary
package, an Atom entry, or both, along with the headers describing them
(content type, packaging, filename, slug).

The :class:`~api.SwordAPI` decides whether a deposit is acceptable for a
given :class:`~models.Item`, stores the original deposit in the
preservation bundle of that item and, when ingest fails, writes the
deposit to disk so that it can be recovered later on.
Content negotiation for the representations we serve is done by
:func:`~negotiation.analyse_accept`.
"""
