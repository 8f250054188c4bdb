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
'''
Command line tool of emoji-catalog
'''
from typing import Any
from typing import List
from typing import Optional
from typing import Union
import os
import sys
import argparse
import logging
import logging.handlers

from ecat_util import LOGGER
from ecat_util import _
import ecat_util
from ecat_annotations import EmojiLocale
import ecat_annotations
from ecat_container import EmojiContainer

def parse_args(argv: Optional[List[str]] = None) -> Any:
    '''Parse the command line arguments'''
    parser = argparse.ArgumentParser(
        description=_('Search emoji by their annotations'))
    parser.add_argument(
        'keyword',
        nargs='?',
        default='',
        help='the beginning of an emoji name, default: %(default)r')
    parser.add_argument(
        '--locale', '-l',
        dest='locale',
        default='',
        help='the locale of the annotations, default: '
        + 'the locale of LC_MESSAGES, English if there are no '
        + 'annotations for it')
    parser.add_argument(
        '--list-locales',
        action='store_true',
        dest='list_locales',
        default=False,
        help='list the locales which have annotations, default: %(default)s')
    parser.add_argument(
        '--group', '-g',
        action='store_true',
        dest='group',
        default=False,
        help='print the (group, subgroup) label of each emoji, '
        + 'default: %(default)s')
    parser.add_argument(
        '--no-debug-log', '-n',
        action='store_true',
        dest='no_debug_log',
        default=False,
        help='Do not write log file '
        + '~/.local/share/emoji-catalog/debug.log, log to stderr instead, '
        + 'default: %(default)s')
    return parser.parse_args(argv)

# The handler added by setup_logging(), replaced when it is called again:
_LOG_HANDLER: Optional[logging.Handler] = None

def setup_logging(no_debug_log: bool) -> None:
    '''Log into a daily rotated debug.log or to stderr

    Calling it again replaces the handler added by the previous call.
    '''
    global _LOG_HANDLER # pylint: disable=global-statement
    if _LOG_HANDLER is not None:
        LOGGER.removeHandler(_LOG_HANDLER)
        _LOG_HANDLER.close()
        _LOG_HANDLER = None
    log_handler: Union[
        logging.StreamHandler, logging.handlers.TimedRotatingFileHandler] = (
            logging.StreamHandler(stream=sys.stderr))
    if not no_debug_log:
        log_dir = ecat_util.xdg_data_path('emoji-catalog')
        os.makedirs(log_dir, exist_ok=True)
        log_handler = logging.handlers.TimedRotatingFileHandler(
            os.path.join(log_dir, 'debug.log'),
            when='midnight',
            interval=1,
            backupCount=7,
            encoding='UTF-8',
            delay=False,
            utc=False,
            atTime=None)
    log_formatter = logging.Formatter(
        '%(asctime)s %(filename)s '
        'line %(lineno)d %(funcName)s %(levelname)s: '
        '%(message)s')
    log_handler.setFormatter(log_formatter)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.addHandler(log_handler)
    _LOG_HANDLER = log_handler

def list_locales() -> None:
    '''Print the locales which have annotations with a description'''
    for language in ecat_annotations.available_locales():
        description = ecat_util.locale_language_description(language)
        print(f'{language}\t{description}')

def main(argv: Optional[List[str]] = None) -> int:
    '''Main program'''
    args = parse_args(argv)
    setup_logging(args.no_debug_log)
    LOGGER.info('********** STARTING **********')
    if args.list_locales:
        list_locales()
        return 0
    locale_id = args.locale or ecat_util.get_effective_lc_messages()
    emoji_locale = EmojiLocale.from_identifier(locale_id)
    if emoji_locale is None:
        LOGGER.info('No emoji annotations for “%s”, using English', locale_id)
        if args.locale:
            print(_('No emoji annotations for “%s”, using English')
                  % locale_id, file=sys.stderr)
    container = EmojiContainer(emoji_locale=emoji_locale)
    container.load()
    results = container.search(args.keyword)
    if not args.group:
        for entry in results:
            print(f'{entry.key}\t{entry.name}')
        return 0
    matching_keys = {entry.key for entry in results}
    for label, entries in container.catalog.grouped.items():
        for entry in entries:
            if entry.key in matching_keys:
                print(f'{entry.key}\t{entry.name}\t'
                      f'{label.group} / {label.subgroup}')
    return 0

if __name__ == "__main__":
    sys.exit(main())
