"""
Tests for the pagination calculator and the shared list parameters.
"""

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from apps.core.filters import build_list_query, parse_limit
from apps.core.pagination import calculate_pagination


class CalculatePaginationTests(SimpleTestCase):

    def test_middle_page(self):
        meta = calculate_pagination(2, 10, 25)

        self.assertEqual(meta['currentPage'], 2)
        self.assertEqual(meta['itemsPerPage'], 10)
        self.assertEqual(meta['totalItems'], 25)
        self.assertEqual(meta['totalPages'], 3)
        self.assertTrue(meta['hasNextPage'])
        self.assertTrue(meta['hasPrevPage'])
        self.assertEqual(meta['nextPage'], 3)
        self.assertEqual(meta['prevPage'], 1)

    def test_first_and_last_page(self):
        first = calculate_pagination(1, 10, 25)
        self.assertFalse(first['hasPrevPage'])
        self.assertIsNone(first['prevPage'])

        last = calculate_pagination(3, 10, 25)
        self.assertFalse(last['hasNextPage'])
        self.assertIsNone(last['nextPage'])

    def test_no_items(self):
        meta = calculate_pagination(1, 10, 0)

        self.assertEqual(meta['totalPages'], 0)
        self.assertFalse(meta['hasNextPage'])
        self.assertFalse(meta['hasPrevPage'])

    def test_exact_multiple(self):
        self.assertEqual(calculate_pagination(1, 5, 20)['totalPages'], 4)


@override_settings(API_PAGE_SIZE=10, API_MAX_PAGE_SIZE=100)
class ListParamsTests(SimpleTestCase):
    SORT_FIELDS = {'title': 'title', 'created_at': 'created_at'}

    def build(self, params):
        return build_list_query(None, params, sort_fields=self.SORT_FIELDS, default_sort='created_at')

    def test_defaults(self):
        query = self.build({})

        self.assertEqual(query.page, 1)
        self.assertEqual(query.limit, 10)
        self.assertEqual(query.skip, 0)
        self.assertEqual(query.ordering, ('-created_at', '-pk'))

    def test_ascending_sort_and_skip(self):
        query = self.build({'sort_by': 'title', 'sort_order': 'asc', 'page': '3', 'limit': '20'})

        self.assertEqual(query.ordering, ('title', 'pk'))
        self.assertEqual(query.skip, 40)

    def test_camel_case_sort_field(self):
        self.assertEqual(self.build({'sort_by': 'createdAt'}).ordering, ('-created_at', '-pk'))

    def test_unknown_sort_field_rejected(self):
        with self.assertRaises(ValidationError):
            self.build({'sort_by': 'password'})

    def test_bad_sort_order_rejected(self):
        with self.assertRaises(ValidationError):
            self.build({'sort_order': 'sideways'})

    def test_page_and_limit_bounds(self):
        for params in ({'page': '0'}, {'limit': '0'}, {'limit': '101'}, {'page': 'two'}):
            with self.subTest(params=params):
                with self.assertRaises(ValidationError):
                    self.build(params)

    def test_limit_at_maximum_allowed(self):
        self.assertEqual(self.build({'limit': '100'}).limit, 100)

    def test_parse_limit(self):
        self.assertEqual(parse_limit(None, default=20), 20)
        self.assertEqual(parse_limit('', default=20), 20)
        self.assertEqual(parse_limit('5', default=20), 5)
        with self.assertRaises(ValidationError):
            parse_limit('500', default=20)
