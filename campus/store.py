"""
store.py
Table store backed by CSV files, one <table>.csv per table under a root
directory. Values come back as strings (empty cell -> None), the way the
hosted database hands untyped columns to the dashboard.
"""
import csv
import logging
import os

log = logging.getLogger(__name__)


class RecordNotFound(LookupError):
    def __init__(self, table, record_id):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table}: no record with id {record_id!r}")


def _sort_key(value):
    """Empty cells last, numbers before text, numbers compared as numbers."""
    if value is None:
        return (2, 0.0, '')
    try:
        x = float(value)
    except ValueError:
        return (1, 0.0, value)
    if x != x:  # nan
        return (1, 0.0, value)
    return (0, x, '')


class CsvStore:
    def __init__(self, root):
        self.root = root

    def _path(self, table):
        return os.path.join(self.root, f"{table}.csv")

    def _read(self, table):
        path = self._path(table)
        if not os.path.exists(path):
            return [], []
        with open(path, newline='') as f:
            r = csv.DictReader(f)
            rows = [{k: (v if v != '' else None) for k, v in row.items()} for row in r]
            return list(r.fieldnames or []), rows

    def _write(self, table, fieldnames, rows):
        os.makedirs(self.root, exist_ok=True)
        with open(self._path(table), 'w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            for row in rows:
                w.writerow({k: ('' if row.get(k) is None else row.get(k)) for k in fieldnames})

    # ---- queries ----

    def get_all(self, table, order_by=None):
        _, rows = self._read(table)
        if order_by:
            rows.sort(key=lambda row: _sort_key(row.get(order_by)))
        return rows

    def select(self, table, **filters):
        """Rows whose columns equal every filter value (compared as strings)."""
        return [row for row in self.get_all(table)
                if all(row.get(k) == str(v) for k, v in filters.items())]

    def get_by_id(self, table, record_id):
        for row in self.get_all(table):
            if row.get('id') == str(record_id):
                return row
        raise RecordNotFound(table, record_id)

    # ---- mutations ----

    def insert(self, table, record):
        fieldnames, rows = self._read(table)
        record = dict(record)
        if record.get('id') is None:
            ids = [int(r['id']) for r in rows if (r.get('id') or '').isdigit()]
            record['id'] = str(max(ids, default=0) + 1)
        record = {k: (None if v is None else str(v)) for k, v in record.items()}
        for k in ['id'] + list(record):
            if k not in fieldnames:
                fieldnames.append(k)
        rows.append(record)
        self._write(table, fieldnames, rows)
        log.debug("Inserted %s/%s", table, record['id'])
        return record

    def update(self, table, record_id, changes):
        fieldnames, rows = self._read(table)
        for row in rows:
            if row.get('id') == str(record_id):
                for k, v in changes.items():
                    row[k] = None if v is None else str(v)
                    if k not in fieldnames:
                        fieldnames.append(k)
                self._write(table, fieldnames, rows)
                return row
        raise RecordNotFound(table, record_id)

    def delete(self, table, record_id):
        fieldnames, rows = self._read(table)
        kept = [row for row in rows if row.get('id') != str(record_id)]
        if len(kept) == len(rows):
            raise RecordNotFound(table, record_id)
        self._write(table, fieldnames, kept)


def paths_with_waypoints(store):
    """routes rows, each with a 'waypoints' list joined on route_id."""
    waypoints = store.get_all('waypoints')
    routes = store.get_all('routes')
    for route in routes:
        route['waypoints'] = [wp for wp in waypoints if wp.get('route_id') == route.get('id')]
    return routes
