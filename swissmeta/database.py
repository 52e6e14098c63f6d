"""Storage for the single live tournament: one JSON blob in a key-value
table, saved after every edit."""

import json
from datetime import datetime

from sqlalchemy import schema, types, orm
from sqlalchemy.engine import create_engine

from swissmeta.config import config, getLogger
from swissmeta.tournament import Tournament, SwissMetaError

logger = getLogger(__name__)

metadata = schema.MetaData()
mapper_registry = orm.registry(metadata=metadata)

liveTable = schema.Table('LiveTournament', metadata,
        schema.Column('KEY', types.String, primary_key=True),
        schema.Column('DATA', types.Text),
        schema.Column('UPDATED', types.DateTime))

class LiveRecord(object):
    def __init__(self, key, data, updated=None):
        self.key = key
        self.data = data
        self.updated = updated

mapper_registry.map_imperatively(LiveRecord, liveTable, properties={
    'key': liveTable.c.KEY,
    'data': liveTable.c.DATA,
    'updated': liveTable.c.UPDATED
})

class LiveStore(object):
    """Load, save and clear the live tournament."""

    def __init__(self, connection=None, key=None):
        """connection: SQLAlchemy URL (defaults to [database] connection).
        key: Row key the tournament is stored under."""
        connection = connection or config.get('database', 'connection',
                fallback='sqlite:///swissmeta-live.db')
        self.key = key or config.get('database', 'key', fallback='live_tournament_v1')
        self.engine = create_engine(connection, echo=False)
        metadata.create_all(self.engine)
        self.sessionmaker = orm.sessionmaker(bind=self.engine, autoflush=False,
                expire_on_commit=True)

    def load(self):
        """Return the stored Tournament, or None if nothing usable is stored."""
        with self.sessionmaker() as session:
            record = session.get(LiveRecord, self.key)
            if record is None:
                return None
            data = record.data
        try:
            return Tournament.fromDict(json.loads(data))
        except (ValueError, SwissMetaError) as e:
            logger.warning('Ignoring unreadable live tournament %s: %s', self.key, e)
            return None

    def save(self, t):
        data = json.dumps(t.toDict(), ensure_ascii=False)
        with self.sessionmaker() as session:
            record = session.get(LiveRecord, self.key)
            if record is None:
                record = LiveRecord(self.key, data)
                session.add(record)
            record.data = data
            record.updated = datetime.now()
            session.commit()
        logger.debug('Saved %s under %s', t, self.key)

    def clear(self):
        with self.sessionmaker() as session:
            record = session.get(LiveRecord, self.key)
            if record is not None:
                session.delete(record)
                session.commit()
        logger.info('Cleared live tournament %s', self.key)
