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

'''Keyword search over the names of an annotated catalog'''

from typing import Any
from typing import Callable
from typing import List
import threading

# pylint: disable=wrong-import-position
from gi import require_version # type: ignore
require_version('GLib', '2.0')
from gi.repository import GLib # type: ignore
# pylint: enable=wrong-import-position

from ecat_util import LOGGER
import ecat_util
from ecat_catalog import Catalog
from ecat_catalog import EmojiEntry

def name_matches(name: str, keyword: str) -> bool:
    '''Checks whether one of the “|” separated names starts with keyword

    The names are stripped of surrounding white space before
    comparing, the comparison is case sensitive.  Empty pieces
    between two “|” do not count as names.

    Examples:

    >>> name_matches('face | grin | grinning face', 'grin')
    True

    >>> name_matches('face | grin | grinning face', 'Grin')
    False

    >>> name_matches('face | grin | grinning face', 'ace')
    False

    >>> name_matches('face', '')
    True

    >>> name_matches('', '')
    False
    '''
    for part in name.split('|'):
        if not part:
            continue
        if part.strip().startswith(keyword):
            return True
    return False

def _search(catalog: Catalog, keyword: str) -> List[EmojiEntry]:
    with catalog.lock:
        results = [entry for entry in catalog.entries()
                   if name_matches(entry.name, keyword)]
    if ecat_util.DEBUG_LEVEL > 1:
        LOGGER.debug('search(%r) -> %d results', keyword, len(results))
    return results

def search(catalog: Catalog, keyword: str) -> List[EmojiEntry]:
    '''Returns the entries with a name starting with keyword

    The result is in catalog order, i.e. in the order of emoji-test.txt,
    not sorted by relevance.  An empty keyword returns every
    entry which has a name.

    The catalog has about 1400 entries with a few names each, a
    linear scan is fast enough.

    :param catalog: A built and annotated catalog
    :param keyword: The beginning of a name to look for
    :raises NotBuiltError: if the catalog has not been built
    :raises NotAnnotatedError: if no annotations have been merged
    '''
    catalog.require_annotated('search')
    return _search(catalog, keyword)

def _deliver_results(
        callback: Callable[..., Any],
        results: List[EmojiEntry],
        user_data: Any) -> bool:
    '''Hand the search results to the callback in the main thread

    :return: *Must* always return False to avoid that this callback
             called by GLib.idle_add() runs again.
    '''
    callback(results, *user_data)
    return False

def _search_thread_function(
        catalog: Catalog,
        keyword: str,
        callback: Callable[..., Any],
        user_data: Any) -> None:
    '''Thread to search and to hand the results to the main loop'''
    results = _search(catalog, keyword)
    GLib.idle_add(_deliver_results, callback, results, user_data)

def search_async(
        catalog: Catalog,
        keyword: str,
        callback: Callable[..., Any],
        *user_data: Any) -> threading.Thread:
    '''Searches in a thread and delivers the results on the main loop

    Same as search() but the scan runs in a daemon thread and
    “callback(results, *user_data)” is called from the GLib main
    loop of the calling application when the results are there.
    There is no way to cancel a search.  Do not rebuild the catalog
    while a search is running.

    :param catalog: A built and annotated catalog
    :param keyword: The beginning of a name to look for
    :param callback: Called with the list of results and user_data
    :return: The thread running the search
    :raises NotBuiltError: if the catalog has not been built
    :raises NotAnnotatedError: if no annotations have been merged
    '''
    catalog.require_annotated('search_async')
    search_thread = threading.Thread(
        daemon=True,
        target=_search_thread_function,
        args=(catalog, keyword, callback, user_data))
    search_thread.start()
    return search_thread
