import base64
from unittest.mock import Mock

import pytest

from simpledb_dao.core import CountQueryExecutor, DomainGateway, parse_count
from simpledb_dao.exceptions import ParseError, StaleCursorError


def _count_response(value, next_token=None):
    response = {'Items': [{'Name': 'Domain', 'Attributes': [{'Name': 'Count', 'Value': value}]}]}
    if next_token:
        response['NextToken'] = next_token
    return response


@pytest.fixture
def count_client():
    client = Mock()
    client.select.return_value = _count_response('300')
    return client


@pytest.fixture
def executor(simpledb_config, count_client):
    return CountQueryExecutor(DomainGateway(simpledb_config, "customers", client=count_client))


class TestParseCount:

    def test_parses_first_attribute_of_first_row(self):
        assert parse_count(_count_response('42')) == 42

    def test_empty_result_is_zero(self):
        assert parse_count({'Items': []}) == 0
        assert parse_count({}) == 0

    def test_row_without_attributes_is_skipped(self):
        response = {'Items': [{'Name': 'Domain', 'Attributes': []}, _count_response('5')['Items'][0]]}

        assert parse_count(response) == 5

    @pytest.mark.parametrize("value", ['abc', '4.2', '', '0x10'])
    def test_non_numeric_value_raises(self, value):
        with pytest.raises(ParseError) as exc_info:
            parse_count(_count_response(value))

        assert exc_info.value.value == value

    def test_base64_encoded_count_is_decoded(self):
        response = _count_response(base64.b64encode(b'12').decode('ascii'))
        response['Items'][0]['Attributes'][0]['AlternateValueEncoding'] = 'base64'

        assert parse_count(response) == 12

    @pytest.mark.parametrize("value", ['@@@', base64.b64encode(b'\xff').decode('ascii')])
    def test_undecodable_count_raises_parse_error(self, value):
        response = _count_response(value)
        response['Items'][0]['Attributes'][0]['AlternateValueEncoding'] = 'base64'

        with pytest.raises(ParseError) as exc_info:
            parse_count(response)

        assert exc_info.value.value == value


class TestCountQueryExecutor:

    def test_count_all_builds_expression(self, executor, count_client):
        assert executor.count_all() == 300
        count_client.select.assert_called_once_with(SelectExpression="select count(*) from `customers`")

    def test_count_where_passes_fragment_verbatim(self, executor, count_client):
        count_client.select.return_value = _count_response('12')

        assert executor.count_where("age > '030' and name like 'A%'") == 12
        count_client.select.assert_called_once_with(
            SelectExpression="select count(*) from `customers` where age > '030' and name like 'A%'"
        )

    def test_empty_result_counts_zero(self, executor, count_client):
        count_client.select.return_value = {'Items': []}

        assert executor.count_all() == 0
        assert executor.count_where("age > '100'") == 0

    def test_bad_fragment_result_is_parse_error_not_zero(self, executor, count_client):
        count_client.select.return_value = _count_response('not-a-number')

        with pytest.raises(ParseError):
            executor.count_where("badfragment")

    def test_partial_counts_are_summed(self, executor, count_client):
        count_client.select.side_effect = [
            _count_response('1000', 'tok-1'),
            _count_response('250', 'tok-2'),
            _count_response('7'),
        ]

        assert executor.count_all() == 1257
        tokens = [call.kwargs.get('NextToken') for call in count_client.select.call_args_list]
        assert tokens == [None, 'tok-1', 'tok-2']

    def test_undecodable_count_is_parse_error(self, executor, count_client):
        response = _count_response(base64.b64encode(b'\xff').decode('ascii'))
        response['Items'][0]['Attributes'][0]['AlternateValueEncoding'] = 'base64'
        count_client.select.return_value = response

        with pytest.raises(ParseError):
            executor.count_all()

    def test_empty_chunk_with_token_raises(self, executor, count_client):
        count_client.select.return_value = {'Items': [], 'NextToken': 'tok'}

        with pytest.raises(StaleCursorError):
            executor.count_all()
