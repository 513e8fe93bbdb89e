import os
import time

import pytest

from sword2.config import SwordConfiguration
from sword2.deposit import AuthCredentials
from sword2.deposit import Deposit
from sword2.dumper import FailureDumper
from sword2.errors import DumpFailure


@pytest.fixture
def dumper():
    return FailureDumper(SwordConfiguration())


def read_headers(path):
    with open(path + '-headers', encoding='utf-8') as f:
        return f.read().splitlines()


class TestStorePackageAsFile:
    """
    Tests around keeping failed packages on disk
    """

    def test_package(self, dumper, failed_package_dir, zip_deposit, zip_content, auth):
        zip_deposit.filename = 'monadologie.zip'
        path = dumper.store_package_as_file(zip_deposit, auth)

        assert os.path.dirname(path) == str(failed_package_dir)
        assert os.path.basename(path).startswith('sword-leibnizg-')
        with open(path, 'rb') as f:
            assert f.read() == zip_content
        assert read_headers(path) == [
            'Filename=monadologie.zip',
            'Content-Type=application/zip',
            'Packaging=http://purl.org/net/sword/package/SimpleZip',
            'On Behalf of=newton',
            'Slug=',
            'User name=leibnizg',
        ]

    def test_package_from_file(self, dumper, failed_package_dir, tmp_path, auth):
        upload = tmp_path / 'upload'
        upload.write_bytes(b'%PDF-1.4\n%%EOF\n')
        deposit = Deposit(mime_type='application/pdf', file=str(upload))

        path = dumper.store_package_as_file(deposit, auth)
        with open(path, 'rb') as f:
            assert f.read() == b'%PDF-1.4\n%%EOF\n'
        assert 'Packaging=' in read_headers(path)

    def test_missing_directory(self, settings, dumper, tmp_path, zip_deposit, auth):
        settings.SWORD2_FAILED_PACKAGE_DIR = str(tmp_path / 'nowhere')
        with pytest.raises(DumpFailure):
            dumper.store_package_as_file(zip_deposit, auth)

    def test_not_configured(self, settings, dumper, zip_deposit, auth):
        settings.SWORD2_FAILED_PACKAGE_DIR = None
        with pytest.raises(DumpFailure):
            dumper.store_package_as_file(zip_deposit, auth)

    def test_not_a_directory(self, settings, dumper, tmp_path, zip_deposit, auth):
        path = tmp_path / 'failed'
        path.write_text('')
        settings.SWORD2_FAILED_PACKAGE_DIR = str(path)
        with pytest.raises(DumpFailure):
            dumper.store_package_as_file(zip_deposit, auth)

    def test_unreadable_package(self, dumper, failed_package_dir, tmp_path, auth, caplog):
        deposit = Deposit(mime_type='application/zip', file=str(tmp_path / 'vanished.zip'))
        with pytest.raises(DumpFailure) as e:
            dumper.store_package_as_file(deposit, auth)
        assert isinstance(e.value.__cause__, OSError)
        assert 'Could not write failed deposit' in caplog.text

    def test_non_ascii_headers(self, dumper, failed_package_dir, zip_deposit, auth):
        zip_deposit.filename = 'Théodicée.zip'
        zip_deposit.slug = 'essais-de-théodicée'
        path = dumper.store_package_as_file(zip_deposit, auth)
        with open(path + '-headers', encoding='utf-8') as f:
            headers = f.read().splitlines()
        assert 'Filename=Théodicée.zip' in headers
        assert 'Slug=essais-de-théodicée' in headers

    def test_same_millisecond(self, dumper, failed_package_dir, zip_deposit, auth, monkeypatch):
        """
        A second dump with the same name does not overwrite the first one
        """
        monkeypatch.setattr(time, 'time', lambda: 1400000000.0)
        first = dumper.store_package_as_file(zip_deposit, auth)
        zip_deposit.content = b'second'
        with pytest.raises(DumpFailure) as e:
            dumper.store_package_as_file(zip_deposit, auth)
        assert isinstance(e.value.__cause__, FileExistsError)
        with open(first, 'rb') as f:
            assert f.read() != b'second'


class TestStoreEntryAsFile:

    def test_entry(self, dumper, failed_package_dir, entry_deposit, user_leibniz):
        path = dumper.store_entry_as_file(entry_deposit, AuthCredentials(user_leibniz.username))

        with open(path, 'rb') as f:
            assert b'<title>Monadologie</title>' in f.read()
        assert read_headers(path) == [
            'Filename=',
            'Content-Type=application/atom+xml;type=entry',
            'Packaging=',
            'On Behalf of=',
            'Slug=',
            'User name=leibnizg',
        ]

    def test_missing_directory(self, settings, dumper, entry_deposit, auth):
        settings.SWORD2_FAILED_PACKAGE_DIR = None
        with pytest.raises(DumpFailure):
            dumper.store_entry_as_file(entry_deposit, auth)
