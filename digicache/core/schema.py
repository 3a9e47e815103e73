"""Table definitions for the box content database."""

CREATE_BOX_IDS_TABLE = """
CREATE TABLE IF NOT EXISTS box_ids (
    id          TEXT PRIMARY KEY
);
"""

CREATE_IMAGES_TABLE = """
CREATE TABLE IF NOT EXISTS images (
    id           TEXT PRIMARY KEY,
    box_id       TEXT NOT NULL,
    image_data   BLOB NOT NULL,
    content_type TEXT DEFAULT 'image/jpeg',
    created_at   TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

# Redundant with images.box_id; listing goes through this table.
CREATE_BOX_CONTENTS_TABLE = """
CREATE TABLE IF NOT EXISTS box_contents (
    box_id      TEXT,
    item_id     TEXT,
    FOREIGN KEY (box_id) REFERENCES box_ids(id)
);
"""

CREATE_BACKGROUND_IMAGES_TABLE = """
CREATE TABLE IF NOT EXISTS background_images (
    box_id       TEXT PRIMARY KEY,
    image_data   BLOB NOT NULL,
    content_type TEXT DEFAULT 'image/jpeg',
    updated_at   TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (box_id) REFERENCES box_ids(id)
);
"""

CREATE_TEXTS_TABLE = """
CREATE TABLE IF NOT EXISTS texts (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    box_id      TEXT NOT NULL,
    content     TEXT NOT NULL,
    created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

CREATE_SPOTIFY_SONGS_TABLE = """
CREATE TABLE IF NOT EXISTS spotify_songs (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    box_id          TEXT,
    spotify_id      TEXT,
    name            TEXT,
    artist          TEXT,
    album           TEXT,
    album_cover_url TEXT,
    preview_url     TEXT,
    spotify_url     TEXT,
    created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

ALL_TABLES = [
    CREATE_BOX_IDS_TABLE,
    CREATE_IMAGES_TABLE,
    CREATE_BOX_CONTENTS_TABLE,
    CREATE_BACKGROUND_IMAGES_TABLE,
    CREATE_TEXTS_TABLE,
    CREATE_SPOTIFY_SONGS_TABLE,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_images_box_id   ON images(box_id);",
    "CREATE INDEX IF NOT EXISTS idx_contents_box_id ON box_contents(box_id);",
    "CREATE INDEX IF NOT EXISTS idx_texts_box_id    ON texts(box_id);",
    "CREATE INDEX IF NOT EXISTS idx_songs_box_id    ON spotify_songs(box_id);",
]

# Columns added after the first release: (table, column, declaration).
# SQLite refuses non-constant defaults in ALTER TABLE, so timestamps added this
# way start out NULL for old rows.
MIGRATION_COLUMNS = [
    ("images", "content_type", "TEXT DEFAULT 'image/jpeg'"),
    ("images", "created_at", "TIMESTAMP"),
    ("background_images", "content_type", "TEXT DEFAULT 'image/jpeg'"),
    ("background_images", "updated_at", "TIMESTAMP"),
    ("texts", "created_at", "TIMESTAMP"),
    ("spotify_songs", "created_at", "TIMESTAMP"),
]
