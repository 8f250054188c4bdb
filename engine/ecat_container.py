# vim:et sts=4 sw=4
#
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

'''A container which loads, annotates, and searches a catalog

An application creates one EmojiContainer and keeps it, there is no
global instance.  The container does not watch the input language
itself, the application calls input_method_language_changed() when its
input language changes.
'''

from typing import Any
from typing import Callable
from typing import Iterable
from typing import List
from typing import Optional
import threading

from ecat_util import LOGGER
from ecat_catalog import Catalog
from ecat_catalog import EmojiEntry
from ecat_annotations import AnnotationMergeResult
from ecat_annotations import EmojiLocale
import ecat_annotations
import ecat_emoji_test
import ecat_search

AnnotationsChangedCallback = Callable[[EmojiLocale], Any]

class EmojiContainer:
    '''Owns a catalog and the locale of its annotations'''

    def __init__(self,
                 emoji_locale: Optional[EmojiLocale] = None,
                 emoji_test_path: str = '',
                 dirnames: Optional[Iterable[str]] = None) -> None:
        '''
        :param emoji_locale: The locale of the annotations,
                             English by default
        :param emoji_test_path: The path of emoji-test.txt, searched
                                in “dirnames” if empty
        :param dirnames: The data directories to search, by default
                         ecat_util.data_dirnames()
        '''
        self._dirnames = None if dirnames is None else tuple(dirnames)
        self._emoji_test_path = emoji_test_path
        if emoji_locale is None:
            emoji_locale = EmojiLocale.default(self._dirnames)
        self.emoji_locale: EmojiLocale = emoji_locale
        # Whether input_method_language_changed() changes the
        # annotations, off by default:
        self.automatically_update_annotations: bool = False
        self.catalog = Catalog()
        self._annotations_changed_callbacks: List[
            AnnotationsChangedCallback] = []

    @property
    def is_loaded(self) -> bool:
        '''Whether load() has been called'''
        return self.catalog.is_built

    def load(self) -> AnnotationMergeResult:
        '''Builds a new catalog and merges the annotations of emoji_locale

        Replaces the catalog, use load_annotations() to change only
        the annotations of a loaded catalog.
        '''
        self.catalog = ecat_emoji_test.build(
            self._emoji_test_path, self._dirnames)
        return self.load_annotations()

    def load_annotations(self) -> AnnotationMergeResult:
        '''Merges the annotations of emoji_locale into the catalog

        :raises NotBuiltError: if load() has not been called
        '''
        return ecat_annotations.merge_annotations(
            self.catalog, self.emoji_locale)

    def connect_annotations_changed(
            self, callback: AnnotationsChangedCallback) -> None:
        '''Registers a function called with the new EmojiLocale
        after input_method_language_changed() changed the annotations.
        '''
        self._annotations_changed_callbacks.append(callback)

    def disconnect_annotations_changed(
            self, callback: AnnotationsChangedCallback) -> None:
        '''Removes a function registered with connect_annotations_changed()'''
        self._annotations_changed_callbacks.remove(callback)

    def input_method_language_changed(self, language: str) -> bool:
        '''Follows a change of the input language of the application

        Does nothing unless automatically_update_annotations is True.
        Otherwise, if there are annotations for the language, they
        become the annotations of the catalog and the callbacks
        registered with connect_annotations_changed() are called.

        :param language: The new input language, e.g. “de-DE”
        :return: True if the annotations changed, False if not
        '''
        if not self.automatically_update_annotations or not language:
            return False
        emoji_locale = EmojiLocale.from_identifier(language, self._dirnames)
        if emoji_locale is None:
            LOGGER.info('No emoji annotations for “%s”, keeping “%s”',
                        language, self.emoji_locale.language)
            return False
        self.emoji_locale = emoji_locale
        self.load_annotations()
        for callback in list(self._annotations_changed_callbacks):
            callback(emoji_locale)
        return True

    def search(self, keyword: str) -> List[EmojiEntry]:
        '''See ecat_search.search()'''
        return ecat_search.search(self.catalog, keyword)

    def search_async(self,
                     keyword: str,
                     callback: Callable[..., Any],
                     *user_data: Any) -> threading.Thread:
        '''See ecat_search.search_async()'''
        return ecat_search.search_async(
            self.catalog, keyword, callback, *user_data)
