"""Load historical tournaments from an archive laid out as

    <base>/data/tournaments/index.json
    <base>/<path of each tournament file>

where base is a local directory or an http(s) URL."""

import json
import os
from operator import attrgetter

import requests

from swissmeta.config import config, getLogger, defaultBase
from swissmeta.tournament import SwissMetaError, Tournament
from swissmeta.util import getMonth

logger = getLogger(__name__)

MODES = ('month', 'last', 'single')

class ArchiveError(SwissMetaError):
    """An archive resource could not be loaded."""

class TournamentIndexItem(object):
    def __init__(self, tid, date, name, path):
        self.id = tid
        self.date = date
        self.name = name
        self.path = path

    def getMonth(self):
        return getMonth(self.date)

    def __repr__(self):
        return '<TournamentIndexItem({0}, {1}: {2})>'.format(self.id, self.date,
                self.path)

def isRemote(base):
    return base.startswith('http://') or base.startswith('https://')

def fetch_json(base, path, timeout=20):
    """Read a JSON resource relative to base, from disk or over HTTP."""
    if isRemote(base):
        url = '{0}/{1}'.format(base.rstrip('/'), path.lstrip('/'))
        headers = {
            'Accept': 'application/json, */*',
            'cache-control': 'no-cache'
        }
        try:
            response = requests.get(url, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            raise ArchiveError("Couldn't load {0}: {1}".format(url, e))
        if not response.ok:
            raise ArchiveError("Couldn't load {0}: HTTP {1}".format(url,
                response.status_code))
        try:
            return response.json()
        except ValueError as e:
            raise ArchiveError('{0} is not well-formed JSON: {1}'.format(url, e))
    filename = os.path.join(base, path.lstrip('/'))
    try:
        with open(filename, encoding='utf-8') as f:
            return json.load(f)
    except OSError as e:
        raise ArchiveError("Couldn't load {0}: {1}".format(filename, e))
    except ValueError as e:
        raise ArchiveError('{0} is not well-formed JSON: {1}'.format(filename, e))

class Archive(object):
    def __init__(self, base=None, index=None):
        """base: Directory or URL the archive paths are relative to.
        index: Path of the index file (defaults to the configured one)."""
        self.base = base or defaultBase()
        self.index = index or config.get('archive', 'index',
                fallback='data/tournaments/index.json')

    def loadIndex(self):
        """Load the tournament index, newest tournament first."""
        data = fetch_json(self.base, self.index)
        try:
            items = [ TournamentIndexItem(i['id'], i['date'], i.get('name', i['id']),
                i['path']) for i in data ]
        except (KeyError, TypeError) as e:
            raise ArchiveError('Malformed tournament index {0}: {1}'.format(
                self.index, e))
        items.sort(key=attrgetter('date'), reverse=True)
        logger.info('Loaded index of %d tournaments from %s', len(items), self.base)
        return items

    def loadTournament(self, item):
        data = fetch_json(self.base, item.path)
        t = Tournament.fromDict(data)
        logger.debug('Loaded %s', t)
        return t

    def loadTournaments(self, items):
        """Load several tournaments, oldest first."""
        tournaments = [ self.loadTournament(item) for item in items ]
        tournaments.sort(key=attrgetter('date'))
        return tournaments

def getMonths(index):
    """Distinct months (YYYY-MM) present in the index, newest first."""
    return sorted({ item.getMonth() for item in index }, reverse=True)

def selectWindow(index, mode='month', month=None, last=4, tid=None):
    """Select the tournaments to analyze from an index sorted newest first.

    mode: 'month' for every tournament of one month (default: the newest
          month), 'last' for the newest N tournaments, 'single' for one
          tournament by id (default: the newest).
    """
    if mode not in MODES:
        raise ArchiveError("Unknown window mode '{0}', expected one of {1}"
                .format(mode, ', '.join(MODES)))
    if not index:
        return []
    if mode == 'last':
        return index[:last]
    if mode == 'single':
        tid = tid or index[0].id
        return [ item for item in index if item.id == tid ]
    month = month or index[0].getMonth()
    return [ item for item in index if item.getMonth() == month ]
