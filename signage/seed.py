import logging
from sqlalchemy.orm import Session
from signage.db import SessionLocal, init_db
from signage.models.content import Content
from signage.models.display import Display
from signage.models.playlist import PLAYLIST_IN_USE, Playlist, PlaylistItem
from signage.models.schedule import Schedule

logger = logging.getLogger(__name__)


def seed() -> None:
    init_db()
    db: Session = SessionLocal()
    try:
        lobby = Display(name="Lobby", location="Main Entrance", screen_width=1080, screen_height=1920, orientation="PORTRAIT")
        cafeteria = Display(name="Cafeteria", location="Ground Floor", screen_width=1920, screen_height=1080)
        db.add(lobby)
        db.add(cafeteria)
        db.commit()
        db.refresh(lobby)
        db.refresh(cafeteria)

        welcome = Content(title="Welcome Poster", type="IMAGE", mime_type="image/png", width=1080, height=1920, file_key="content/images/welcome.png")
        menu = Content(title="Weekly Menu", type="PDF", mime_type="application/pdf", width=1240, height=3508, file_key="content/documents/menu.pdf")
        promo = Content(title="Promo Reel", type="VIDEO", mime_type="video/mp4", width=1920, height=1080, duration=30, file_key="content/videos/promo.mp4")
        for content in (welcome, menu, promo):
            db.add(content)
        db.commit()

        daytime = Playlist(name="Daytime Loop", status=PLAYLIST_IN_USE)
        evening = Playlist(name="Evening Menu", status=PLAYLIST_IN_USE)
        db.add(daytime)
        db.add(evening)
        db.commit()
        db.refresh(daytime)
        db.refresh(evening)

        db.add(PlaylistItem(playlist_id=daytime.id, content_id=welcome.id, sequence=10, duration=15))
        db.add(PlaylistItem(playlist_id=daytime.id, content_id=promo.id, sequence=20, duration=30))
        db.add(PlaylistItem(playlist_id=evening.id, content_id=menu.id, sequence=10, duration=20))
        db.commit()

        db.add(
            Schedule(
                name="Lobby daytime",
                playlist_id=daytime.id,
                display_id=lobby.id,
                start_time="08:00",
                end_time="17:00",
                priority=0,
            )
        )
        db.add(
            Schedule(
                name="Cafeteria late menu",
                playlist_id=evening.id,
                display_id=cafeteria.id,
                start_time="17:00",
                end_time="02:00",
                priority=10,
            )
        )
        db.commit()
        logger.info("Seeded displays %s and %s", lobby.id, cafeteria.id)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
