import pytest

from sword2.errors import ERROR_BAD_REQUEST
from sword2.errors import NegotiationMalformed
from sword2.negotiation import QualityMap
from sword2.negotiation import analyse_accept
from sword2.negotiation import get_header
from sword2.negotiation import media_range_matches


class TestGetHeader:
    """
    Tests around case insensitive header lookup
    """

    headers = {
        'Content-Type': 'application/zip',
        'PACKAGING': ' http://purl.org/net/sword/package/SimpleZip',
    }

    @pytest.mark.parametrize('name', ['content-type', 'Content-Type', 'CONTENT-TYPE'])
    def test_case_insensitive(self, name):
        assert get_header(self.headers, name) == 'application/zip'

    def test_value_not_normalized(self):
        assert get_header(self.headers, 'Packaging') == ' http://purl.org/net/sword/package/SimpleZip'

    def test_default(self):
        assert get_header(self.headers, 'Slug', 'no-slug') == 'no-slug'
        assert get_header(self.headers, 'Slug') is None


class TestAnalyseAccept:
    """
    Tests around the parsing of Accept headers
    """

    def test_no_header(self):
        assert analyse_accept(None) is None

    def test_empty_header(self):
        qm = analyse_accept('')
        assert len(qm) >= 1
        assert '' in qm.content_types()

    def test_explicit_qualities_descending(self):
        qm = analyse_accept('a/b;q=0.5,c/d;q=0.9')
        assert list(qm) == [0.9, 0.5]
        assert qm[0.9] == frozenset(['c/d'])
        assert qm[0.5] == frozenset(['a/b'])
        assert qm.content_types() == ['c/d', 'a/b']

    def test_implicit_qualities_follow_header_order(self):
        qm = analyse_accept('a/b,c/d,e/f')
        qualities = {ct: q for q in qm for ct in qm[q]}
        assert qualities['a/b'] > qualities['c/d'] > qualities['e/f']
        for q in qualities.values():
            assert 0 < q < 1
        assert qm.content_types() == ['a/b', 'c/d', 'e/f']

    def test_implicit_below_explicit_full_quality(self):
        qm = analyse_accept('a/b;q=1.0,c/d')
        assert qm[1.0] == frozenset(['a/b'])
        qualities = {ct: q for q in qm for ct in qm[q]}
        assert qualities['c/d'] < 1.0

    def test_implicit_below_lowest_explicit_quality(self):
        qm = analyse_accept('text/html, a/b;q=0.8, c/d;q=0.3, e/f')
        qualities = {ct: q for q in qm for ct in qm[q]}
        assert qualities['a/b'] == 0.8
        assert qualities['c/d'] == 0.3
        assert 0.3 > qualities['text/html'] > qualities['e/f'] > 0

    def test_explicit_quality_ranks_above_unqualified(self):
        """
        A type without q never outranks an explicitly rated one
        """
        qm = analyse_accept('text/html, application/xml;q=0.9')
        assert qm.content_types() == ['application/xml', 'text/html']
        assert qm.best_match(['text/html', 'application/xml']) == 'application/xml'

    def test_parameters_are_kept(self):
        qm = analyse_accept('application/atom+xml;type=entry')
        assert qm.content_types() == ['application/atom+xml;type=entry']

    def test_parameters_and_quality(self):
        """
        In type;params;q, the quality is read from the last component
        """
        qm = analyse_accept('text/xml;level=1;q=0.4')
        assert list(qm) == [0.4]
        assert qm[0.4] == frozenset(['text/xml;level=1'])

    def test_two_parameters_without_quality(self):
        qm = analyse_accept('text/xml;level=1;charset=utf-8')
        assert qm.content_types() == ['text/xml;level=1;charset=utf-8']

    def test_shared_quality(self):
        qm = analyse_accept('a/b;q=0.5, c/d;q=0.5')
        assert list(qm) == [0.5]
        assert qm[0.5] == frozenset(['a/b', 'c/d'])

    def test_zero_quality_is_not_acceptable(self):
        qm = analyse_accept('a/b;q=0,c/d')
        assert qm.content_types() == ['c/d']

    def test_whitespace(self):
        qm = analyse_accept(' a/b ;  q=0.7 ,  c/d ')
        assert qm[0.7] == frozenset(['a/b'])
        assert 'c/d' in qm.content_types()

    @pytest.mark.parametrize('header', ['a/b;q=abc', 'a/b;q=', 'a/b;q=-0.5', 'a/b;q=nan', 'c/d, a/b;level=1;q=x'])
    def test_malformed_quality(self, header):
        with pytest.raises(NegotiationMalformed) as e:
            analyse_accept(header)
        assert e.value.status == 400
        assert e.value.error_uri == ERROR_BAD_REQUEST
        assert e.value.fragment.startswith('q=')

    def test_quality_map_is_read_only(self):
        qm = analyse_accept('a/b')
        with pytest.raises(TypeError):
            qm[0.1] = frozenset(['c/d'])
        assert isinstance(qm[list(qm)[0]], frozenset)

    def test_each_call_is_independent(self):
        first = analyse_accept('a/b;q=0.5')
        analyse_accept('c/d;q=0.5')
        assert first[0.5] == frozenset(['a/b'])


class TestQualityMap:

    def test_repr(self):
        assert repr(QualityMap([(0.5, 'a/b')])) == "QualityMap({0.5: frozenset({'a/b'})})"

    def test_empty(self):
        qm = QualityMap()
        assert len(qm) == 0
        assert qm.best_match(['a/b']) is None


class TestBestMatch:

    @pytest.mark.parametrize('accept,available,expected', [
        ('text/html, application/*;q=0.5', ['application/zip'], 'application/zip'),
        ('text/html', ['application/zip'], None),
        ('*/*', ['application/zip'], 'application/zip'),
        ('application/atom+xml;type=feed', ['application/atom+xml;type=entry', 'application/xml'], None),
        ('application/atom+xml', ['application/atom+xml;type=entry'], 'application/atom+xml;type=entry'),
        ('application/xml, application/atom+xml', ['application/atom+xml;type=entry', 'application/xml'], 'application/xml'),
        ('application/xml;q=0.2, */*;q=0.1', ['text/plain', 'application/xml'], 'application/xml'),
    ])
    def test_best_match(self, accept, available, expected):
        assert analyse_accept(accept).best_match(available) == expected

    def test_server_preference_breaks_ties(self):
        qm = analyse_accept('application/xml;q=0.5, application/zip;q=0.5')
        assert qm.best_match(['application/zip', 'application/xml']) == 'application/zip'


class TestMediaRangeMatches:

    @pytest.mark.parametrize('media_range,content_type,expected', [
        ('*/*', 'application/zip', True),
        ('application/*', 'application/zip', True),
        ('text/*', 'application/zip', False),
        ('Application/ZIP', 'application/zip', True),
        ('application/atom+xml;type=entry', 'application/atom+xml', True),
        ('application/atom+xml;type=entry', 'application/atom+xml;type=feed', False),
    ])
    def test_matches(self, media_range, content_type, expected):
        assert media_range_matches(media_range, content_type) == expected
