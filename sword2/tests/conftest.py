import pytest

from io import BytesIO
from zipfile import ZIP_DEFLATED
from zipfile import ZipFile

from lxml import etree

from sword2.api import SwordAPI
from sword2.config import PACKAGE_SIMPLE_ZIP
from sword2.context import SwordContext
from sword2.deposit import AuthCredentials
from sword2.deposit import Deposit
from sword2.deposit import VerboseDescription
from sword2.documents import ATOM_NAMESPACE


@pytest.fixture
def zip_content():
    """
    A small zip package with a PDF and its METS description
    """
    s = BytesIO()
    with ZipFile(s, 'w') as zip_file:
        zip_file.writestr('document.pdf', b'%PDF-1.4\n%%EOF\n')
        zip_file.writestr('mets.xml', '<mets xmlns="http://www.loc.gov/METS/"/>')
    return s.getvalue()


@pytest.fixture
def atom_entry():
    """
    Returns an Atom entry as lxml element
    """
    xml = (
        '<entry xmlns="{}" xmlns:dcterms="http://purl.org/dc/terms/">'
        '<title>Monadologie</title>'
        '<dcterms:creator>Leibniz, Gottfried Wilhelm</dcterms:creator>'
        '</entry>'
    ).format(ATOM_NAMESPACE)
    return etree.fromstring(xml)


@pytest.fixture
def zip_deposit(zip_content):
    """
    A binary only deposit of a SimpleZip package, without filename
    """
    return Deposit(
        mime_type='application/zip',
        packaging=PACKAGE_SIMPLE_ZIP,
        content=zip_content,
    )


@pytest.fixture
def entry_deposit(atom_entry):
    """
    An entry only deposit
    """
    return Deposit(
        mime_type='application/atom+xml;type=entry',
        entry=atom_entry,
    )


@pytest.fixture
def multipart_deposit(zip_content, atom_entry):
    """
    A deposit with an Atom entry and a zip package
    """
    return Deposit(
        mime_type='application/zip',
        packaging=PACKAGE_SIMPLE_ZIP,
        content=zip_content,
        entry=atom_entry,
        slug='monadologie',
    )


@pytest.fixture
def sword_context(user_leibniz):
    return SwordContext(user_leibniz)


@pytest.fixture
def auth(user_leibniz):
    return AuthCredentials(user_leibniz.username, on_behalf_of='newton')


@pytest.fixture
def api():
    return SwordAPI()


@pytest.fixture
def verbose_description():
    return VerboseDescription()


@pytest.fixture
def failed_package_dir(settings, tmp_path):
    """
    Configures a directory for failed deposits and returns it
    """
    path = tmp_path / 'failed'
    path.mkdir()
    settings.SWORD2_FAILED_PACKAGE_DIR = str(path)
    return path


@pytest.fixture
def corrupt_zip_content():
    """
    A zip package with a valid central directory but damaged deflate data
    """
    s = BytesIO()
    with ZipFile(s, 'w', compression=ZIP_DEFLATED) as zip_file:
        zip_file.writestr('document.txt', 'Les monades n\'ont point de fenêtres. ' * 200)
    content = bytearray(s.getvalue())
    # data starts after the 30 bytes local header and the member name
    start = 30 + len('document.txt')
    for i in range(start, start + 16):
        content[i] ^= 0xFF
    return bytes(content)
