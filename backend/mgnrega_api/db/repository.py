# backend/mgnrega_api/db/repository.py
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from mgnrega_api.models.performance import District, Performance

_PERIOD_KEY = ["district_code", "month", "year"]

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert(session, model):
    dialect = session.get_bind().dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise NotImplementedError(f"Upserts are not supported on {dialect!r}") from None


def _district_dict(row):
    return {
        "name": row.name,
        "code": row.code,
        "lat": float(row.lat) if row.lat is not None else None,
        "lng": float(row.lng) if row.lng is not None else None,
    }


# ---------- DISTRICTS ----------
def list_districts(session):
    stmt = select(District.name, District.code, District.lat, District.lng).order_by(District.name)
    return [_district_dict(row) for row in session.execute(stmt)]


def list_district_codes(session):
    return list(session.scalars(select(District.code).order_by(District.id)))


def upsert_district_if_absent(session, district):
    stmt = _insert(session, District).values(
        name=district["name"],
        code=district["code"],
        lat=district["lat"],
        lng=district["lng"],
    )
    if district.get("state"):
        stmt = stmt.values(state=district["state"])
    result = session.execute(stmt.on_conflict_do_nothing(index_elements=["code"]))
    return result.rowcount == 1


# ---------- PERFORMANCE ----------
def get_latest_performance(session, district_code):
    stmt = (
        select(Performance.data)
        .where(Performance.district_code == district_code)
        .order_by(Performance.year.desc(), Performance.month.desc())
        .limit(1)
    )
    return session.scalars(stmt).first()


def get_recent_performance(session, district_code, limit=7):
    """Most recent first by (year, month)."""
    stmt = (
        select(Performance.month, Performance.year, Performance.data)
        .where(Performance.district_code == district_code)
        .order_by(Performance.year.desc(), Performance.month.desc())
        .limit(limit)
    )
    return [
        {"month": row.month, "year": row.year, "data": row.data}
        for row in session.execute(stmt)
    ]


def _performance_values(session, district_code, month, year, data, updated_at):
    return _insert(session, Performance).values(
        district_code=district_code,
        month=month,
        year=year,
        data=data,
        updated_at=updated_at or datetime.now(timezone.utc),
    )


def upsert_performance(session, district_code, month, year, data, updated_at=None):
    """Insert the period, or overwrite its data and updated_at if it already exists."""
    stmt = _performance_values(session, district_code, month, year, data, updated_at)
    stmt = stmt.on_conflict_do_update(
        index_elements=_PERIOD_KEY,
        set_={"data": stmt.excluded.data, "updated_at": stmt.excluded.updated_at},
    )
    session.execute(stmt)


def insert_performance_if_absent(session, district_code, month, year, data, updated_at=None):
    stmt = _performance_values(session, district_code, month, year, data, updated_at)
    result = session.execute(stmt.on_conflict_do_nothing(index_elements=_PERIOD_KEY))
    return result.rowcount == 1
