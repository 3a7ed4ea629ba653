import hashlib
from datetime import datetime, timedelta
from sqlmodel import Session, select
from domain.models.song import User, Song, SongDetail
from utils.logger import get_logger

logger = get_logger(__name__)

def seed_demo_catalogue(session: Session) -> bool:
    """Insert a small demo catalogue into an empty database. Returns False if songs already exist."""
    if session.exec(select(Song)).first():
        logger.info("Catalogue already populated, skipping demo seed.")
        return False

    base = datetime(2024, 1, 1)

    users = [
        User(id=1, name="mapper_one"),
        User(id=2, name="mapper_two"),
        User(id=3, name="retired_mapper", deleted_at=base),
    ]

    # (song_id, user_id, name, [(song_name, sub_name, author, plays, downloads, deleted)])
    demo_songs = [
        (1, 1, "Neon Lights", [
            ("Neon Lights", "Original Mix", "Kinetic", 40, 12, False),
            ("Neon Lights", "Extended Mix", "Kinetic", 95, 30, False),
        ]),
        (2, 1, "Afterglow", [
            ("Afterglow", "", "Solace", 70, 55, False),
            ("Afterglow", "Remaster", "Solace", 300, 80, True),
        ]),
        (3, 2, "Paper Planes", [
            ("Paper Planes", "Acoustic", "Drift", 15, 90, False),
        ]),
        (4, 3, "Old Times", [
            ("Old Times", "", "Echo", 500, 400, False),
        ]),
    ]

    session.add_all(users)

    detail_id = 1
    for offset_days, (song_id, user_id, name, revisions) in enumerate(demo_songs):
        created = base + timedelta(days=offset_days)
        session.add(Song(id=song_id, user_id=user_id, name=name, created_at=created))
        for song_name, sub_name, author, plays, downloads, deleted in revisions:
            session.add(SongDetail(
                id=detail_id,
                song_id=song_id,
                song_name=song_name,
                song_sub_name=sub_name,
                author_name=author,
                hash_md5=hashlib.md5(f"{song_id}:{detail_id}".encode("utf-8")).hexdigest(),
                play_count=plays,
                download_count=downloads,
                created_at=created + timedelta(hours=detail_id),
                deleted_at=created if deleted else None,
            ))
            detail_id += 1

    session.commit()
    logger.info(f"Seeded {len(demo_songs)} demo songs.")
    return True
