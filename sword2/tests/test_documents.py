from lxml import etree

from sword2.documents import ATOM
from sword2.documents import SWORD
from sword2.documents import DepositReceipt
from sword2.documents import error_document
from sword2.errors import ERROR_CONTENT


class TestDepositReceipt:

    def test_minimal(self, item):
        receipt = DepositReceipt(item, 'http://sword.example.org/edit/1/', 'http://sword.example.org/edit-media/1/')
        xml = receipt.to_xml()
        assert xml.findtext(ATOM + 'title') == 'Essais de Théodicée'
        assert xml.find(SWORD + 'packaging') is None
        assert xml.find(SWORD + 'treatment') is None
        assert [l.get('rel') for l in xml.findall(ATOM + 'link')] == ['edit', 'edit-media']

    def test_serialize(self, item):
        receipt = DepositReceipt(item, 'http://sword.example.org/edit/1/', 'http://sword.example.org/edit-media/1/',
                                 packaging='http://purl.org/net/sword/package/Binary')
        receipt.set_original_deposit('http://sword.example.org/edit-media/1/', 'application/pdf')
        receipt.treatment = 'Stored'
        receipt.verbose_description = 'Deposit stored'
        doc = receipt.serialize()
        assert doc.startswith(b'<?xml')
        xml = etree.fromstring(doc)
        assert xml.findtext(SWORD + 'treatment') == 'Stored'
        assert xml.findtext(SWORD + 'verboseDescription') == 'Deposit stored'
        assert xml.findall(ATOM + 'link')[-1].get('type') == 'application/pdf'


class TestErrorDocument:

    def test_error_document(self):
        xml = etree.fromstring(error_document(ERROR_CONTENT, 'Unacceptable content type', 'details'))
        assert xml.tag == SWORD + 'error'
        assert xml.get('href') == ERROR_CONTENT
        assert xml.findtext(ATOM + 'summary') == 'Unacceptable content type'
        assert xml.findtext(SWORD + 'verboseDescription') == 'details'

    def test_without_verbose_description(self):
        xml = etree.fromstring(error_document(ERROR_CONTENT, 'Unacceptable content type'))
        assert xml.find(SWORD + 'verboseDescription') is None
