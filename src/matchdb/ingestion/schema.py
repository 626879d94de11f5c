"""Table schema for teams, players, matches and match records."""

TEAMS_TABLE = "teams"
PLAYERS_TABLE = "players"
MATCHES_TABLE = "matches"
RECORDS_TABLE = "match_records"

TEAM_COLUMNS = ["id", "name", "manager_full_name", "team_group"]
PLAYER_COLUMNS = ["id", "squad_number", "position", "full_name", "team_id"]
MATCH_COLUMNS = ["id", "team_a_id", "team_b_id", "match_date", "score"]
RECORD_COLUMNS = ["id", "player_id", "match_id", "from_minutes", "to_minutes"]

ID_CONFLICT_COLUMNS = ["id"]

SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS teams (
    id                 BIGINT       PRIMARY KEY,
    name               VARCHAR(255) NOT NULL,
    manager_full_name  VARCHAR(255) NOT NULL,
    team_group         VARCHAR(64)  NOT NULL
);
CREATE TABLE IF NOT EXISTS players (
    id            BIGINT       PRIMARY KEY,
    squad_number  INTEGER      NOT NULL,
    position      VARCHAR(64)  NOT NULL,
    full_name     VARCHAR(255) NOT NULL,
    team_id       BIGINT       REFERENCES teams(id)
);
CREATE TABLE IF NOT EXISTS matches (
    id          BIGINT       PRIMARY KEY,
    team_a_id   BIGINT       NOT NULL,
    team_b_id   BIGINT       NOT NULL,
    match_date  DATE         NOT NULL,
    score       VARCHAR(255) NOT NULL
);
CREATE TABLE IF NOT EXISTS match_records (
    id            BIGINT   PRIMARY KEY,
    player_id     BIGINT   NOT NULL REFERENCES players(id),
    match_id      BIGINT   NOT NULL REFERENCES matches(id),
    from_minutes  INTEGER  NOT NULL,
    to_minutes    INTEGER  NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_players_team ON players(team_id);
CREATE INDEX IF NOT EXISTS idx_records_player ON match_records(player_id);
CREATE INDEX IF NOT EXISTS idx_records_match ON match_records(match_id);
"""
