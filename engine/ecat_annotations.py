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

'''Merges CLDR emoji annotations into a Catalog

The annotations come from the CLDR files

https://github.com/unicode-org/cldr/tree/main/common/annotations
https://github.com/unicode-org/cldr/tree/main/common/annotationsDerived

which look like this:

    <ldml>
        <annotations>
            <annotation cp="😀">face | grin | grinning face</annotation>
            <annotation cp="😀" type="tts">grinning face</annotation>
        </annotations>
    </ldml>

The “tts” annotation is the text to speak for an emoji, the other one
a “|” separated list of names and keywords. annotationsDerived
contains mostly the annotations of sequences with skin tones and is
merged after annotations, its values win.
'''

from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Tuple
import os
import xml.etree.ElementTree

from ecat_util import LOGGER
import ecat_util
from ecat_catalog import Catalog
from ecat_catalog import CatalogState
from ecat_catalog import EmojiEntry

ANNOTATIONS_SUBDIR = 'annotations'
ANNOTATIONS_DERIVED_SUBDIR = 'annotationsDerived'

# CLDR marks values inherited from the parent locale like this, such a
# record has no value of its own:
INHERITANCE_MARKER = '↑↑↑'

class AnnotationRecord(NamedTuple):
    '''One <annotation> element of a CLDR annotation file'''
    cp: str
    tts: bool
    text: str

class AnnotationMergeResult(NamedTuple):
    '''Counts of what a merge did with the annotation records

    applied: records which updated a catalog entry
    dropped: records whose emoji is not in the catalog or which
             have no “cp” attribute
    skipped: records which only mark an inherited value
    '''
    applied: int = 0
    dropped: int = 0
    skipped: int = 0

    def __add__(self, other: object) -> 'AnnotationMergeResult':
        if not isinstance(other, AnnotationMergeResult):
            return NotImplemented
        return AnnotationMergeResult(
            applied=self.applied + other.applied,
            dropped=self.dropped + other.dropped,
            skipped=self.skipped + other.skipped)

class EmojiLocale:
    '''The language of the annotations merged into a catalog

    An EmojiLocale knows the annotation files for its language. Use
    EmojiLocale.from_identifier() to find the best EmojiLocale
    for a locale name, EmojiLocale.default() for English.
    '''
    def __init__(self,
                 language: str,
                 annotation_path: str,
                 annotation_derived_path: str = '') -> None:
        '''
        :param language: The language of the annotation files,
                         as in the CLDR file names, e.g. “de” or “zh_Hant”
        :param annotation_path: The path of the annotations file
        :param annotation_derived_path: The path of the annotationsDerived
                                        file, empty if there is none
        '''
        self.language = language
        self.annotation_path = annotation_path
        self.annotation_derived_path = annotation_derived_path

    def __repr__(self) -> str:
        return (f'EmojiLocale(language={self.language!r}, '
                f'annotation_path={self.annotation_path!r}, '
                f'annotation_derived_path={self.annotation_derived_path!r})')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmojiLocale):
            return NotImplemented
        return (self.language, self.annotation_path,
                self.annotation_derived_path) == (
                    other.language, other.annotation_path,
                    other.annotation_derived_path)

    def __hash__(self) -> int:
        return hash((self.language, self.annotation_path,
                     self.annotation_derived_path))

    @classmethod
    def from_language(
            cls,
            language: str,
            dirnames: Optional[Iterable[str]] = None) -> Optional['EmojiLocale']:
        '''Returns the EmojiLocale for exactly this CLDR language

        Returns None if there is no annotations file for it.
        '''
        if dirnames is None:
            dirnames = ecat_util.data_dirnames()
        dirnames = tuple(dirnames)
        basenames = (language + '.xml',)
        (path, dummy_open_function) = ecat_util.find_path_and_open_function(
            dirnames, basenames, subdir=ANNOTATIONS_SUBDIR)
        if not path:
            return None
        (derived_path,
         dummy_open_function) = ecat_util.find_path_and_open_function(
             dirnames, basenames, subdir=ANNOTATIONS_DERIVED_SUBDIR)
        return cls(language, path, derived_path)

    @classmethod
    def from_identifier(
            cls,
            locale_id: str,
            dirnames: Optional[Iterable[str]] = None) -> Optional['EmojiLocale']:
        '''Finds the best EmojiLocale for a locale name

        Tries the locale and its fallbacks (e.g. “es_MX”, “es_419”,
        “es”), the first one which has an annotations file wins.  A
        fallback to a different language is never used, None is
        returned if there are no annotations for the language of the
        locale at all.

        :param locale_id: A locale name like “de_DE.UTF-8”, “sr_RS@latin”
                          or a language tag like “zh-Hant-TW”
        :param dirnames: The directories to search, by default
                         ecat_util.data_dirnames()
        '''
        if dirnames is None:
            dirnames = ecat_util.data_dirnames()
        dirnames = tuple(dirnames)
        locale = ecat_util.parse_locale(locale_id)
        if not locale.language:
            return None
        acceptable_match = locale.language
        if locale.script:
            acceptable_match += '_' + locale.script
        normalized = ecat_util.locale_normalize(locale_id)
        for language in ecat_util.expand_languages([normalized]):
            if not language.startswith(acceptable_match):
                continue
            emoji_locale = cls.from_language(language, dirnames)
            if emoji_locale is not None:
                return emoji_locale
        return None

    @classmethod
    def default(cls,
                dirnames: Optional[Iterable[str]] = None) -> 'EmojiLocale':
        '''Returns the English EmojiLocale

        :raises FileNotFoundError: if there are no English annotations
        '''
        emoji_locale = cls.from_language('en', dirnames)
        if emoji_locale is None:
            raise FileNotFoundError(
                'could not find the English emoji annotations en.xml')
        return emoji_locale

def available_locales(dirnames: Optional[Iterable[str]] = None) -> List[str]:
    '''Returns the sorted list of languages which have annotations

    :param dirnames: The directories to search, by default
                     ecat_util.data_dirnames()
    '''
    if dirnames is None:
        dirnames = ecat_util.data_dirnames()
    languages = set()
    for dirname in dirnames:
        path = os.path.join(dirname, ANNOTATIONS_SUBDIR)
        if not os.path.isdir(path):
            continue
        for basename in os.listdir(path):
            for suffix in ('.xml', '.xml.gz'):
                if basename.endswith(suffix):
                    languages.add(basename[:-len(suffix)])
    return sorted(languages)

def parse_annotation_root(
        root: xml.etree.ElementTree.Element) -> Iterator[AnnotationRecord]:
    '''Yields the annotation records below an <ldml> root element

    Elements without a “cp” attribute are yielded with an empty “cp”.
    '''
    for tag in root.iterfind('./annotations/annotation'):
        yield AnnotationRecord(
            cp=tag.attrib.get('cp', ''),
            tts=tag.attrib.get('type') == 'tts',
            text=tag.text or '')

def read_annotation_file(path: str) -> List[AnnotationRecord]:
    '''Reads all annotation records of a (possibly gzipped) CLDR file

    :raises FileNotFoundError: if the file does not exist
    '''
    (found_path, open_function) = ecat_util.find_path_and_open_function(
        ('',), (path,))
    if not found_path or open_function is None:
        LOGGER.error('could not find annotation file "%s"', path)
        raise FileNotFoundError(f'could not find annotation file {path}')
    with open_function(found_path, mode='rb') as annotation_file:
        tree = xml.etree.ElementTree.parse(annotation_file)
    return list(parse_annotation_root(tree.getroot()))

def _set_field(entry: EmojiEntry, tts: bool, text: str) -> None:
    if tts:
        entry.spoken_text = text
    else:
        entry.name = text

def apply_annotation_records(
        full_set: Dict[str, EmojiEntry],
        records: Iterable[AnnotationRecord]) -> AnnotationMergeResult:
    '''Overlays annotation records onto the entries of a catalog

    The emoji string of a record is looked up in “full_set”.  A record
    for an emoji which is not in the catalog (the catalog contains
    only fully-qualified emoji) is dropped.  If the entry found has a
    fully-qualified counterpart, the counterpart gets the same value.

    Later records overwrite earlier ones, applying the same records
    twice gives the same result as applying them once.

    :param full_set: The “full_set” of a catalog, its entries are
                     changed in place
    :param records: The annotation records
    '''
    applied = 0
    dropped = 0
    skipped = 0
    for record in records:
        if not record.cp:
            dropped += 1
            continue
        if record.text == INHERITANCE_MARKER:
            skipped += 1
            continue
        entry = full_set.get(record.cp)
        if entry is None:
            if ecat_util.DEBUG_LEVEL > 1:
                LOGGER.debug('No emoji “%s” in catalog, dropping %r',
                             record.cp, record)
            dropped += 1
            continue
        _set_field(entry, record.tts, record.text)
        if entry.fully_qualified_key is not None:
            counterpart = full_set.get(entry.fully_qualified_key)
            if counterpart is not None and counterpart is not entry:
                _set_field(counterpart, record.tts, record.text)
        applied += 1
    return AnnotationMergeResult(
        applied=applied, dropped=dropped, skipped=skipped)

def _annotation_passes(emoji_locale: EmojiLocale) -> Iterator[Tuple[str, str]]:
    yield (ANNOTATIONS_SUBDIR, emoji_locale.annotation_path)
    if emoji_locale.annotation_derived_path:
        yield (ANNOTATIONS_DERIVED_SUBDIR,
               emoji_locale.annotation_derived_path)
    else:
        LOGGER.info('No %s for “%s”, merging %s only',
                    ANNOTATIONS_DERIVED_SUBDIR, emoji_locale.language,
                    ANNOTATIONS_SUBDIR)

def merge_annotations(
        catalog: Catalog,
        emoji_locale: EmojiLocale) -> AnnotationMergeResult:
    '''Merges the annotations of a locale into a built catalog

    First the annotations file, then the annotationsDerived file
    (if there is one) is applied with apply_annotation_records().
    Entries are changed in place, none are added or removed.

    :param catalog: A catalog built with ecat_emoji_test.build()
    :param emoji_locale: The locale of the annotations
    :return: The counts of applied, dropped, and skipped records
             of both files together
    :raises NotBuiltError: if the catalog has not been built
    :raises FileNotFoundError: if an annotation file of the locale
                               cannot be found
    '''
    catalog.require_built('merge_annotations')
    passes = [(subdir, read_annotation_file(path))
              for subdir, path in _annotation_passes(emoji_locale)]
    result = AnnotationMergeResult()
    with catalog.lock:
        for subdir, records in passes:
            pass_result = apply_annotation_records(catalog.full_set, records)
            LOGGER.info('Merged %s/%s: %d applied, %d dropped, %d skipped',
                        subdir, emoji_locale.language, pass_result.applied,
                        pass_result.dropped, pass_result.skipped)
            result += pass_result
        catalog.state = CatalogState.ANNOTATED
    return result
