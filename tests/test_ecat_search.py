#!/usr/bin/python3

# emoji-catalog - An annotated, searchable catalog of Unicode emoji
#
# Copyright (c) 2022 The emoji-catalog authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>

'''
This file implements test cases for searching emoji by name
'''

from typing import Any
from typing import List
import sys
import os
import doctest
import logging
import unittest

# pylint: disable=wrong-import-position
from gi import require_version # type: ignore
require_version('GLib', '2.0')
from gi.repository import GLib # type: ignore
# pylint: enable=wrong-import-position

LOGGER = logging.getLogger('emoji-catalog')

# pylint: disable=wrong-import-position
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../engine'))
import ecat_annotations # pylint: disable=import-error
import ecat_emoji_test # pylint: disable=import-error
import ecat_search # pylint: disable=import-error
sys.path.pop(0)
# pylint: enable=wrong-import-position

from ecat_annotations import EmojiLocale # pylint: disable=import-error,wrong-import-order
from ecat_catalog import Catalog # pylint: disable=import-error,wrong-import-order
from ecat_catalog import CatalogStateError # pylint: disable=import-error,wrong-import-order
from ecat_catalog import EmojiEntry # pylint: disable=import-error,wrong-import-order
from ecat_catalog import NotAnnotatedError # pylint: disable=import-error,wrong-import-order
from ecat_catalog import NotBuiltError # pylint: disable=import-error,wrong-import-order

# pylint: disable=missing-function-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=invalid-name
# pylint: disable=line-too-long

DATADIR = os.path.join(os.path.dirname(__file__), '../data')

def _keys(entries: List[EmojiEntry]) -> List[str]:
    return [entry.key for entry in entries]

class SearchTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.maxDiff = None
        self.catalog = ecat_emoji_test.build(dirnames=[DATADIR])
        ecat_annotations.merge_annotations(
            self.catalog, EmojiLocale.default([DATADIR]))

    def tearDown(self) -> None:
        pass

    def test_dummy(self) -> None:
        self.assertEqual(True, True)

    def test_doctests(self) -> None:
        (failed, dummy_attempted) = doctest.testmod(ecat_search)
        self.assertFalse(failed)

    def test_prefix(self) -> None:
        self.assertEqual(
            ['\U0001F600', '\U0001F603', '\U0001F604',
             '\U0001F606', '\U0001F605'],
            _keys(ecat_search.search(self.catalog, 'grinning')))
        self.assertEqual(
            ['\U0001F408', '\U0001F431'],
            _keys(ecat_search.search(self.catalog, 'cat')))
        self.assertEqual(
            ['\U0001F435', '\U0001F412'],
            _keys(ecat_search.search(self.catalog, 'monkey')))

    def test_result_in_catalog_order(self) -> None:
        self.assertEqual(
            ['\U0001F44B', '\U0001F44B\U0001F3FB', '\U0001F44B\U0001F3FC'],
            _keys(ecat_search.search(self.catalog, 'wav')))

    def test_case_sensitive(self) -> None:
        self.assertEqual([], ecat_search.search(self.catalog, 'Cat'))
        self.assertEqual([], ecat_search.search(self.catalog, 'GRINNING'))

    def test_prefix_only(self) -> None:
        # “ace” is inside “face” but no name starts with it:
        self.assertEqual([], ecat_search.search(self.catalog, 'ace'))

    def test_empty_keyword(self) -> None:
        results = ecat_search.search(self.catalog, '')
        self.assertEqual(22, len(results))
        self.assertEqual(
            [entry for entry in self.catalog.entries() if entry.name],
            results)

    def test_no_match(self) -> None:
        self.assertEqual(
            [], ecat_search.search(self.catalog, 'no such emoji name'))

    def test_search_does_not_change_catalog(self) -> None:
        before = [(entry.key, entry.name, entry.spoken_text)
                  for entry in self.catalog.entries()]
        ecat_search.search(self.catalog, 'grin')
        after = [(entry.key, entry.name, entry.spoken_text)
                 for entry in self.catalog.entries()]
        self.assertEqual(before, after)

    def test_search_after_relocalization(self) -> None:
        german = EmojiLocale.from_identifier('de_DE.UTF-8', [DATADIR])
        assert german is not None
        ecat_annotations.merge_annotations(self.catalog, german)
        self.assertEqual(
            ['\U0001F408', '\U0001F431'],
            _keys(ecat_search.search(self.catalog, 'Katze')))

    def test_search_before_build(self) -> None:
        with self.assertRaises(NotBuiltError):
            ecat_search.search(Catalog(), 'grin')

    def test_search_on_empty_catalog(self) -> None:
        # Built, but without a single fully-qualified emoji:
        catalog = ecat_emoji_test.build_from_text(
            '# group: Component\n'
            '1F3FB ; component # 🏻 light skin tone\n')
        self.assertFalse(catalog.is_built)
        with self.assertRaises(CatalogStateError):
            ecat_annotations.merge_annotations(
                catalog, EmojiLocale.default([DATADIR]))
        with self.assertRaises(NotBuiltError):
            ecat_search.search(catalog, '')
        with self.assertRaises(NotBuiltError):
            ecat_search.search(ecat_emoji_test.build_from_text(''), '')

    def test_search_before_annotation(self) -> None:
        catalog = ecat_emoji_test.build(dirnames=[DATADIR])
        with self.assertRaises(NotAnnotatedError):
            ecat_search.search(catalog, 'grin')
        with self.assertRaises(CatalogStateError):
            ecat_search.search(catalog, '')

class SearchAsyncTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = ecat_emoji_test.build(dirnames=[DATADIR])
        ecat_annotations.merge_annotations(
            self.catalog, EmojiLocale.default([DATADIR]))
        self.main_loop = GLib.MainLoop()
        self.results: List[Any] = []
        self.timed_out = False

    def tearDown(self) -> None:
        pass

    def _callback(self, results: List[EmojiEntry], *user_data: Any) -> None:
        self.results.append((results, user_data))
        self.main_loop.quit()

    def _timeout(self) -> bool:
        self.timed_out = True
        self.main_loop.quit()
        return False

    def _run_main_loop(self) -> None:
        timeout_id = GLib.timeout_add_seconds(5, self._timeout)
        self.main_loop.run()
        if not self.timed_out:
            GLib.source_remove(timeout_id)

    def test_dummy(self) -> None:
        self.assertEqual(True, True)

    def test_search_async(self) -> None:
        search_thread = ecat_search.search_async(
            self.catalog, 'cat', self._callback, 'user', 42)
        self._run_main_loop()
        search_thread.join()
        self.assertFalse(self.timed_out)
        self.assertEqual(1, len(self.results))
        (results, user_data) = self.results[0]
        self.assertEqual(['\U0001F408', '\U0001F431'], _keys(results))
        self.assertEqual(('user', 42), user_data)

    def test_search_async_same_as_search(self) -> None:
        ecat_search.search_async(self.catalog, 'grin', self._callback)
        self._run_main_loop()
        self.assertFalse(self.timed_out)
        (results, user_data) = self.results[0]
        self.assertEqual(ecat_search.search(self.catalog, 'grin'), results)
        self.assertEqual((), user_data)

    def test_search_async_preconditions(self) -> None:
        with self.assertRaises(NotBuiltError):
            ecat_search.search_async(Catalog(), 'cat', self._callback)
        with self.assertRaises(NotAnnotatedError):
            ecat_search.search_async(
                ecat_emoji_test.build(dirnames=[DATADIR]),
                'cat', self._callback)
        self.assertEqual([], self.results)

if __name__ == '__main__':
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    unittest.main()
