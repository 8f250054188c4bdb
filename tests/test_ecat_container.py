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
This file implements test cases for the EmojiContainer
'''

from typing import List
import sys
import os
import logging
import unittest

LOGGER = logging.getLogger('emoji-catalog')

# pylint: disable=wrong-import-position
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../engine'))
from ecat_container import EmojiContainer # pylint: disable=import-error
sys.path.pop(0)
# pylint: enable=wrong-import-position

from ecat_annotations import AnnotationMergeResult # pylint: disable=import-error,wrong-import-order
from ecat_annotations import EmojiLocale # pylint: disable=import-error,wrong-import-order
from ecat_catalog import NotBuiltError # pylint: disable=import-error,wrong-import-order

# pylint: disable=missing-function-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=invalid-name
# pylint: disable=line-too-long

DATADIR = os.path.join(os.path.dirname(__file__), '../data')

GRINNING = '\U0001F600'

class EmojiContainerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.container = EmojiContainer(dirnames=[DATADIR])
        self.changed: List[EmojiLocale] = []

    def tearDown(self) -> None:
        pass

    def _annotations_changed(self, emoji_locale: EmojiLocale) -> None:
        self.changed.append(emoji_locale)

    def test_dummy(self) -> None:
        self.assertEqual(True, True)

    def test_default_locale(self) -> None:
        self.assertEqual('en', self.container.emoji_locale.language)
        self.assertFalse(self.container.automatically_update_annotations)

    def test_load(self) -> None:
        self.assertFalse(self.container.is_loaded)
        result = self.container.load()
        self.assertTrue(self.container.is_loaded)
        self.assertTrue(self.container.catalog.is_annotated)
        self.assertEqual(
            AnnotationMergeResult(applied=44, dropped=12, skipped=2), result)
        self.assertEqual(25, len(self.container.catalog))
        self.assertEqual(
            ['\U0001F408', '\U0001F431'],
            [entry.key for entry in self.container.search('cat')])

    def test_explicit_emoji_test_path(self) -> None:
        container = EmojiContainer(
            emoji_test_path=os.path.join(DATADIR, 'emoji-test.txt'),
            dirnames=[DATADIR])
        container.load()
        self.assertEqual(25, len(container.catalog))

    def test_load_annotations_before_load(self) -> None:
        with self.assertRaises(NotBuiltError):
            self.container.load_annotations()
        with self.assertRaises(NotBuiltError):
            self.container.search('cat')

    def test_language_change_ignored_by_default(self) -> None:
        self.container.load()
        self.container.connect_annotations_changed(self._annotations_changed)
        self.assertFalse(self.container.input_method_language_changed('de-DE'))
        self.assertEqual('en', self.container.emoji_locale.language)
        self.assertEqual([], self.changed)
        self.assertEqual(
            'grinning face',
            self.container.catalog.full_set[GRINNING].spoken_text)

    def test_language_change(self) -> None:
        self.container.load()
        self.container.automatically_update_annotations = True
        self.container.connect_annotations_changed(self._annotations_changed)
        self.assertTrue(self.container.input_method_language_changed('de-DE'))
        self.assertEqual('de', self.container.emoji_locale.language)
        self.assertEqual(['de'], [x.language for x in self.changed])
        self.assertEqual(
            'grinsendes Gesicht',
            self.container.catalog.full_set[GRINNING].spoken_text)
        self.assertEqual(
            ['\U0001F408', '\U0001F431'],
            [entry.key for entry in self.container.search('Katze')])

    def test_language_change_without_annotations(self) -> None:
        self.container.load()
        self.container.automatically_update_annotations = True
        self.container.connect_annotations_changed(self._annotations_changed)
        self.assertFalse(self.container.input_method_language_changed('fr-FR'))
        self.assertFalse(self.container.input_method_language_changed(''))
        self.assertEqual('en', self.container.emoji_locale.language)
        self.assertEqual([], self.changed)

    def test_disconnect(self) -> None:
        self.container.load()
        self.container.automatically_update_annotations = True
        self.container.connect_annotations_changed(self._annotations_changed)
        self.container.disconnect_annotations_changed(
            self._annotations_changed)
        self.assertTrue(self.container.input_method_language_changed('de_DE'))
        self.assertEqual([], self.changed)

    def test_back_to_english(self) -> None:
        self.container.load()
        self.container.automatically_update_annotations = True
        self.container.input_method_language_changed('de_DE')
        self.container.input_method_language_changed('en_GB')
        self.assertEqual('en', self.container.emoji_locale.language)
        self.assertEqual(
            'face | grin | grinning face',
            self.container.catalog.full_set[GRINNING].name)

if __name__ == '__main__':
    LOG_HANDLER = logging.StreamHandler(stream=sys.stderr)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(LOG_HANDLER)
    unittest.main()
