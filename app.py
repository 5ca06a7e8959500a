# app.py
"""
Flask entrypoint for the league standings service.

Routes:
  HTML:
    - /standings

  JSON:
    - /api/standings
    - /api/standings/overall
    - /api/teams/<team_id>/playoff-status   (PUT, admin token required)
    - /api/draft/order
    - /api/draft/<draft_class_id>
    - /api/draft/<draft_class_id>/picks       (POST, admin token required)

Query parameters (standings):
  - league=major|minor
  - view=division|conference|overall
  - conference=Eastern Conference (optional filter)
  - division=Atlantic (optional filter)
  - refresh=1 (drop cached teams/games before loading)
  - team=<team id> (HTML only, row highlight)

Notes:
  - One cache and one store client are shared per process.
  - Playoff status and draft pick writes need the X-Admin-Token header to match ADMIN_TOKEN.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template, request, redirect

from league_standings.cache import TTLCache
from league_standings.config import AppConfig
from league_standings.documents import parse_playoff_status
from league_standings.errors import DocumentNotFound, DraftError, InvalidDocument, StoreError
from league_standings.handlers.standings_handler import StandingsHandler
from league_standings.models import DraftPick, StandingsRow, StandingsViewModel
from league_standings.services import DraftService, StandingsService
from league_standings.services.draft import generate_draft_picks
from league_standings.services.draft_service import DraftBoard
from league_standings.store_client import StoreClient

logger = logging.getLogger(__name__)


def create_app(
    cfg: Optional[AppConfig] = None,
    client: Optional[StoreClient] = None,
    cache: Optional[TTLCache] = None,
) -> Flask:
    """
    App factory.

    Builds shared dependencies (client + cache + services) once per process.
    Tests pass their own client/cache to avoid network access.
    """
    cfg = cfg or AppConfig()
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cache = cache or TTLCache()
    client = client or StoreClient(
        cfg.store_api_base,
        cfg.project_id,
        database=cfg.database,
        api_key=cfg.api_key,
        timeout=cfg.request_timeout,
    )

    standings = StandingsService(
        client=client,
        cache=cache,
        standings_ttl=cfg.standings_cache_ttl_seconds,
        season=cfg.season,
    )
    handler = StandingsHandler(standings_service=standings, tz_name=cfg.tz, default_view=cfg.default_view)
    drafts = DraftService(client=client, standings_service=standings)

    app = Flask(__name__)

    # -------------------------
    # Shared parsing helpers
    # -------------------------

    def parse_int(name: str, default: int) -> int:
        """Parse an integer query param with default fallback."""
        try:
            return int(request.args.get(name, default))
        except (TypeError, ValueError):
            return default

    def parse_bool(name: str, default: bool = False) -> bool:
        """
        Parse a boolean-ish query param.

        Treats these as false: 0, false, no, off
        """
        raw = request.args.get(name)
        if raw is None:
            return default
        return raw.strip().lower() not in ("0", "false", "no", "off")

    def parse_league() -> str:
        """Parse league query param with default fallback."""
        return (request.args.get("league") or cfg.default_league).strip().lower()

    def authorized() -> bool:
        """Writes are disabled unless ADMIN_TOKEN is set and echoed in X-Admin-Token."""
        return bool(cfg.admin_token) and request.headers.get("X-Admin-Token") == cfg.admin_token

    def standings_args(view: Optional[str] = None) -> Dict[str, Any]:
        return {
            "league": parse_league(),
            "view": view or request.args.get("view"),
            "conference": (request.args.get("conference") or "").strip() or None,
            "division": (request.args.get("division") or "").strip() or None,
            "refresh": parse_bool("refresh"),
        }

    # -------------------------
    # Serialization
    # -------------------------

    def standings_row_to_dict(s: StandingsRow) -> Dict[str, Any]:
        """Serialize a StandingsRow into JSON-safe primitives."""
        r = s.record
        return {
            "rank": s.rank,
            "id": r.team_id,
            "name": r.name,
            "logoUrl": r.logo_url,
            "league": r.league,
            "conference": r.conference,
            "division": r.division,
            "gamesPlayed": r.games_played,
            "wins": r.wins,
            "losses": r.losses,
            "overtimeLosses": r.overtime_losses,
            "points": r.points,
            "pointPercentage": round(r.point_percentage, 4),
            "goalsFor": r.goals_for,
            "goalsAgainst": r.goals_against,
            "goalDifferential": r.goal_differential,
            "playoffStatus": r.playoff_status.value if r.playoff_status else None,
            "badge": {"text": s.badge.text, "class": s.badge.css_badge_class} if s.badge else None,
            "rowClass": s.badge.row_class if s.badge else "",
        }

    def view_model_to_dict(vm: StandingsViewModel) -> Dict[str, Any]:
        return {
            "generatedAt": vm.now.isoformat(),
            "league": vm.league,
            "view": vm.view,
            "loaded": vm.loaded,
            "errors": list(vm.errors),
            "groups": [
                {
                    "title": g.title,
                    "conference": g.conference,
                    "division": g.division,
                    "teams": [standings_row_to_dict(s) for s in g.rows],
                }
                for g in vm.groups
            ],
        }

    def pick_to_dict(p: DraftPick) -> Dict[str, Any]:
        return {
            "id": p.pick_id or None,
            "draftClassId": p.draft_class_id,
            "season": p.season,
            "round": p.round,
            "pick": p.pick,
            "teamId": p.team_id,
            "originalTeamId": p.original_team_id,
            "playerId": p.player_id,
            "completed": p.completed,
            "passed": p.passed,
        }

    def board_to_dict(board: DraftBoard) -> Dict[str, Any]:
        current_round, current_pick = board.position or (None, None)
        return {
            "draftClassId": board.draft_class_id,
            "currentRound": current_round,
            "currentPick": current_pick,
            "picks": [pick_to_dict(p) for p in board.picks],
        }

    # -------------------------
    # HTML routes
    # -------------------------

    @app.get("/")
    def index():
        """Landing route redirect to standings."""
        return redirect("/standings", code=302)

    @app.get("/standings")
    def standings_page():
        """Standings tables (division, conference or overall view)."""
        ctx = handler.build_context(**standings_args())
        return render_template("standings.html", highlight_team=request.args.get("team", ""), **ctx)

    # -------------------------
    # JSON routes
    # -------------------------

    @app.get("/api/standings")
    def api_standings():
        """Standings JSON payload."""
        return jsonify(view_model_to_dict(handler.build(**standings_args())))

    @app.get("/api/standings/overall")
    def api_standings_overall():
        """Whole-league standings JSON payload."""
        return jsonify(view_model_to_dict(handler.build(**standings_args(view="overall"))))

    @app.put("/api/teams/<team_id>/playoff-status")
    def api_set_playoff_status(team_id: str):
        """
        Assign or clear a team's playoff status.

        Body: {"status": "league"|"conference"|"division"|"playoff"|"eliminated"|"none"|null}
        """
        if not authorized():
            return jsonify({"error": "forbidden"}), 403

        body = request.get_json(silent=True) or {}
        try:
            status = parse_playoff_status(body.get("status"), team_id)
        except InvalidDocument as exc:
            return jsonify({"error": str(exc)}), 400

        value = status.value if status else None
        try:
            client.set_playoff_status(team_id, value)
        except DocumentNotFound:
            return jsonify({"error": f"unknown team {team_id}"}), 404
        except StoreError:
            logger.exception("Error updating playoff status for %s", team_id)
            return jsonify({"error": "store write failed"}), 502

        standings.invalidate_teams()
        return jsonify({"id": team_id, "playoffStatus": value})

    @app.get("/api/draft/order")
    def api_draft_order():
        """
        Suggested draft order (worst record first) with a preview of the picks.

        Query:
          - league=major
          - rounds=N
          - season=N
        """
        league = parse_league()
        rounds = parse_int("rounds", cfg.draft_rounds)
        order = drafts.suggested_order(league)
        try:
            preview = generate_draft_picks(
                draft_class_id=f"preview-{league}",
                season=parse_int("season", cfg.season or 1),
                draft_order=order,
                rounds=rounds,
            )
        except DraftError as exc:
            return jsonify({"league": league, "order": order, "error": str(exc)}), 400

        return jsonify({"league": league, "order": order, "picks": [pick_to_dict(p) for p in preview]})

    @app.get("/api/draft/<draft_class_id>")
    def api_draft_board(draft_class_id: str):
        """Picks of a draft class in order, with the pick currently on the clock."""
        try:
            board = drafts.board(draft_class_id)
        except StoreError:
            logger.exception("Error loading draft %s", draft_class_id)
            return jsonify({"error": "could not load draft picks"}), 502

        return jsonify(board_to_dict(board))

    @app.post("/api/draft/<draft_class_id>/picks")
    def api_make_pick(draft_class_id: str):
        """
        Give a player to the pick on the clock.

        Body: {"playerId": "<player id>"}
        """
        if not authorized():
            return jsonify({"error": "forbidden"}), 403

        body = request.get_json(silent=True) or {}
        player_id = body.get("playerId")
        if not isinstance(player_id, str) or not player_id.strip():
            return jsonify({"error": "playerId is required"}), 400

        try:
            board = drafts.make_pick(draft_class_id, player_id.strip())
        except DraftError as exc:
            return jsonify({"error": str(exc)}), 409
        except DocumentNotFound:
            return jsonify({"error": "draft pick no longer exists"}), 404
        except StoreError:
            logger.exception("Error recording pick in draft %s", draft_class_id)
            return jsonify({"error": "store write failed"}), 502

        return jsonify(board_to_dict(board))

    # -------------------------
    # Health
    # -------------------------

    @app.get("/health")
    def health():
        """Simple health endpoint for Docker/monitoring checks."""
        return {"ok": True}

    return app


# WSGI entrypoint for gunicorn (app:app)
app = create_app()

if __name__ == "__main__":
    # Dev server (not for production).
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")), debug=True)
