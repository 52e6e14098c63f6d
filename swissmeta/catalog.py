"""Deck catalog: display names, aliases and colors for deck keys.

Only reports and charts use the catalog. Statistics work on deck ids."""

import re

from swissmeta.archive import ArchiveError, fetch_json
from swissmeta.config import config, defaultBase

class DeckCatalogItem(object):
    def __init__(self, key, name, oshi=None, color=None, icon=None, aliases=None):
        self.key = key
        self.name = name
        self.oshi = oshi
        self.color = color
        self.icon = icon
        self.aliases = aliases or []

    @staticmethod
    def fromDict(data):
        return DeckCatalogItem(data['key'], data.get('name', data['key']),
                data.get('oshi'), data.get('color'), data.get('icon'),
                data.get('aliases'))

    def __repr__(self):
        return '<DeckCatalogItem({0}: {1})>'.format(self.key, self.name)

def norm(name):
    """Normalize a deck name for lookup: trimmed, lowercase, single spaces,
    typographic apostrophes replaced by plain ones."""
    name = re.sub(r'\s+', ' ', name.strip().lower())
    return re.sub("[’‘`]", "'", name)

class DeckCatalog(object):
    def __init__(self, items=()):
        self.items = sorted(items, key=lambda i: i.name.casefold())
        self.keys = {}
        self.names = {}
        for item in self.items:
            self.keys[item.key] = item
            self.names[norm(item.name)] = item
            for alias in item.aliases:
                self.names[norm(alias)] = item

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def byKey(self, key):
        return self.keys.get(key)

    def byName(self, name):
        """Find an item by display name or alias, ignoring case, spacing and
        apostrophe style."""
        return self.names.get(norm(name))

    def getLabel(self, did, fallback=None):
        """Display name for a deck id; falls back to the given name, then to
        the id itself."""
        item = self.keys.get(did)
        if item:
            return item.name
        if fallback:
            item = self.byName(fallback)
            return item.name if item else fallback
        return did

    def getColor(self, did, fallback=None):
        item = self.keys.get(did)
        if item is None and fallback:
            item = self.byName(fallback)
        return item.color if item else None

def loadDeckCatalog(base=None, path=None):
    """Load the deck catalog from <base>/data/config/decks.json."""
    path = path or config.get('archive', 'catalog', fallback='data/config/decks.json')
    data = fetch_json(base or defaultBase(), path)
    try:
        return DeckCatalog([ DeckCatalogItem.fromDict(d) for d in data ])
    except (KeyError, TypeError, AttributeError) as e:
        raise ArchiveError('Malformed deck catalog {0}: {1}'.format(path, e))
