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

'''The in-memory emoji catalog

A Catalog holds every fully-qualified emoji of emoji-test.txt twice:
once in “full_set”, a dictionary from the emoji string to its entry,
and once in “grouped”, the same entry objects ordered by the
(group, subgroup) label under which they appear in emoji-test.txt.
Both views share the entry objects, annotating an entry through
one view is visible through the other one.
'''

from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Iterator
from typing import NamedTuple
import enum
import threading

class QualificationStatus(enum.Enum):
    '''The status column of a data line in emoji-test.txt

    See http://unicode.org/reports/tr51/#def_fully_qualified_emoji
    '''
    COMPONENT = 'component'
    FULLY_QUALIFIED = 'fully-qualified'
    MINIMALLY_QUALIFIED = 'minimally-qualified'
    UNQUALIFIED = 'unqualified'

    def __str__(self) -> str:
        return self.value

class CatalogState(enum.Enum):
    '''Lifecycle of a Catalog'''
    UNINITIALIZED = enum.auto()
    BUILT = enum.auto()
    ANNOTATED = enum.auto()

    def __str__(self) -> str:
        return self.name.lower()

class CatalogStateError(RuntimeError):
    '''A catalog operation was called in the wrong order'''

class NotBuiltError(CatalogStateError):
    '''The catalog has not been built from emoji-test.txt yet'''

class NotAnnotatedError(CatalogStateError):
    '''The catalog has been built but no annotations are merged yet'''

def codepoints_to_key(codepoints: Sequence[int]) -> str:
    '''Returns the emoji string for a sequence of code points

    Examples:

    >>> codepoints_to_key([0x1F600])
    '😀'

    >>> codepoints_to_key([0x1F600, 0x1F3FB]) == '\\U0001F600\\U0001F3FB'
    True
    '''
    return ''.join(chr(codepoint) for codepoint in codepoints)

class EmojiLabel(NamedTuple):
    '''The (group, subgroup) section of emoji-test.txt of an emoji

    Both parts are None for emoji which appear before the first
    “# group:” or “# subgroup:” line.
    '''
    group: Optional[str] = None
    subgroup: Optional[str] = None

class EmojiEntry:
    '''One emoji of the catalog

    “name” is the CLDR annotation, a “|” separated list of keywords,
    “spoken_text” the CLDR “tts” annotation. Both are empty until
    annotations are merged.

    “fully_qualified_key” is the key of the fully-qualified version
    of this emoji in the same catalog, if this entry is not
    fully-qualified itself and such a version exists. It is
    resolved with Catalog.fully_qualified_counterpart().
    '''
    def __init__(self,
                 codepoints: Sequence[int],
                 status: QualificationStatus,
                 name: str = '',
                 spoken_text: str = '',
                 fully_qualified_key: Optional[str] = None) -> None:
        if not codepoints:
            raise ValueError('An emoji needs at least one code point')
        self.codepoints = tuple(codepoints)
        self.key = codepoints_to_key(self.codepoints)
        self.status = status
        self.name = name
        self.spoken_text = spoken_text
        self.fully_qualified_key = fully_qualified_key

    def __repr__(self) -> str:
        return (f'EmojiEntry(key={self.key!r}, '
                f'codepoints=({", ".join(f"0x{x:X}" for x in self.codepoints)}), '
                f'status={self.status}, name={self.name!r}, '
                f'spoken_text={self.spoken_text!r})')

class Catalog:
    '''The catalog of emoji

    A new catalog is empty and in the state
    CatalogState.UNINITIALIZED.  ecat_emoji_test.build() populates it
    (CatalogState.BUILT) and ecat_annotations.merge_annotations()
    annotates it (CatalogState.ANNOTATED), as often as the locale
    changes.

    “lock” serializes populating, annotating, and searching so
    that a search running in another thread never sees the name of
    one locale together with the spoken text of another one.
    '''
    def __init__(self) -> None:
        self.full_set: Dict[str, EmojiEntry] = {}
        # dict keeps the insertion order, i.e. the order of the
        # labels in emoji-test.txt:
        self.grouped: Dict[EmojiLabel, List[EmojiEntry]] = {}
        self.state = CatalogState.UNINITIALIZED
        self.lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.full_set)

    def __contains__(self, key: object) -> bool:
        return key in self.full_set

    @property
    def is_built(self) -> bool:
        '''Whether the catalog has been populated from emoji-test.txt

        A catalog populated from a text without a single fully-qualified
        emoji is not usable and does not count as built.
        '''
        return self.state != CatalogState.UNINITIALIZED and bool(self.full_set)

    @property
    def is_annotated(self) -> bool:
        '''Whether annotations have been merged at least once'''
        return self.state == CatalogState.ANNOTATED

    def add(self, entry: EmojiEntry, label: EmojiLabel) -> bool:
        '''Adds an entry to both views of the catalog

        :return: False if an entry with the same key is already in the
                 catalog, the new entry is not added then and the
                 first one stays in both views.
        '''
        if entry.key in self.full_set:
            return False
        self.full_set[entry.key] = entry
        try:
            self.grouped[label].append(entry)
        except KeyError:
            self.grouped[label] = [entry]
        return True

    def entries(self) -> Iterator[EmojiEntry]:
        '''Iterates over all entries in label order, then in-group order'''
        for entries in self.grouped.values():
            yield from entries

    def fully_qualified_counterpart(
            self, entry: EmojiEntry) -> Optional[EmojiEntry]:
        '''Returns the fully-qualified version of an entry, if any

        Returns None if the entry has no fully_qualified_key, if that
        key is not in the catalog, or if it refers to the entry itself.
        '''
        if entry.fully_qualified_key is None:
            return None
        counterpart = self.full_set.get(entry.fully_qualified_key)
        if counterpart is entry:
            return None
        return counterpart

    def require_built(self, operation: str) -> None:
        '''Raises NotBuiltError if the catalog has not been built yet'''
        if self.state == CatalogState.UNINITIALIZED:
            raise NotBuiltError(
                f'{operation}() called on a catalog which was never built, '
                'build() must be called first.')
        if not self.full_set:
            raise NotBuiltError(
                f'{operation}() called on an empty catalog, '
                'build() found no fully-qualified emoji.')

    def require_annotated(self, operation: str) -> None:
        '''Raises if the catalog has not been built and annotated yet'''
        self.require_built(operation)
        if not self.is_annotated:
            raise NotAnnotatedError(
                f'{operation}() called on a catalog without annotations, '
                'merge_annotations() must be called after build().')
