#!/usr/bin/env python3
"""
Bowling League Management CLI

Command-line management for the bowling league: bowlers, weeks, stats and
the prediction leaderboard.
"""

import logging

import click
from flask.cli import with_appcontext
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from league import create_app, db
from league.exceptions import LeagueException
from league.forms import validate_batch
from league.forms.league import BowlerForm
from league.models import Bowler, Game, Prediction, Week
from league.services import league_service

app = create_app()


def _bowler_names():
    return {b.id: b.display_name for b in Bowler.query.all()}


@click.group()
def cli():
    """Bowling League Management CLI"""
    pass


# Bowler Management Commands
@cli.group()
def bowler():
    """Bowler management commands"""
    pass


@bowler.command("add")
@click.argument("name")
@click.option("--nickname", help="Name shown on leaderboards")
@click.option("--pin", "pin_code", help="Optional 4-6 digit PIN")
@click.option("--color", "avatar_color", help="Avatar color, e.g. #3b82f6")
@with_appcontext
def add_bowler(name, nickname, pin_code, avatar_color):
    """Add a bowler to the league"""
    try:
        (data,) = validate_batch(
            BowlerForm,
            [
                {
                    "name": name,
                    "nickname": nickname,
                    "pin_code": pin_code,
                    "avatar_color": avatar_color,
                }
            ],
        )
        created = league_service.create_bowler(data)
        click.echo(f"✅ Added bowler {created.display_name} (id={created.id})")
    except LeagueException as e:
        click.echo(f"❌ Error adding bowler: {e.user_message}")
        logging.error(f"Bowler creation failed: {e}")


@bowler.command("list")
@click.option("--active", is_flag=True, help="Only active bowlers")
@with_appcontext
def list_bowlers(active):
    """List all bowlers"""
    bowlers = league_service.list_bowlers(active_only=active)

    if not bowlers:
        click.echo("No bowlers found.")
        return

    click.echo("Bowlers:")
    for b in bowlers:
        status = "🟢" if b.is_active else "🔴"
        nickname = f" ({b.nickname})" if b.nickname else ""
        click.echo(f"  {status} {b.id}: {b.name}{nickname}")


# Week Management Commands
@cli.group()
def week():
    """Week management commands"""
    pass


@week.command("create")
@click.option("--number", "week_number", type=int, help="Week number (default: next)")
@click.option(
    "--date",
    "bowling_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Bowling date (YYYY-MM-DD)",
)
@with_appcontext
def create_week(week_number, bowling_date):
    """Create a league week"""
    try:
        created = league_service.create_week(
            week_number, bowling_date.date() if bowling_date else None
        )
        click.echo(f"✅ Created week {created.week_number}")
    except LeagueException as e:
        click.echo(f"❌ Error creating week: {e.user_message}")
        logging.error(f"Week creation failed: {e}")


def _change_week_status(week_number, action):
    found = Week.query.filter_by(week_number=week_number).first()
    if not found:
        click.echo(f"❌ Week {week_number} not found!")
        return

    try:
        updated = league_service.set_week_status(found.id, action)
        click.echo(f"✅ Week {updated.week_number} is now {updated.status}")
    except LeagueException as e:
        click.echo(f"❌ Could not {action} week {week_number}: {e.user_message}")
        logging.error(f"Week {action} failed: {e}")


@week.command("lock")
@click.argument("week_number", type=int)
@with_appcontext
def lock_week(week_number):
    """Lock predictions for a week"""
    _change_week_status(week_number, "lock")


@week.command("unlock")
@click.argument("week_number", type=int)
@with_appcontext
def unlock_week(week_number):
    """Reopen predictions for a week"""
    _change_week_status(week_number, "unlock")


@week.command("complete")
@click.argument("week_number", type=int)
@with_appcontext
def complete_week(week_number):
    """Mark a week complete; scores can no longer change"""
    _change_week_status(week_number, "complete")


@week.command("list")
@with_appcontext
def list_weeks():
    """List all weeks"""
    weeks = league_service.list_weeks()

    if not weeks:
        click.echo("No weeks found.")
        return

    icons = {"open": "🟢", "locked": "🔒", "complete": "✅"}
    click.echo("Weeks:")
    for w in weeks:
        date = w.bowling_date.isoformat() if w.bowling_date else "no date"
        click.echo(f"  {icons[w.status]} Week {w.week_number} ({date}) - {w.status}")


# Stats Commands
@cli.group()
def stats():
    """Bowler statistics"""
    pass


@stats.command("show")
@click.option("--bowler", "bowler_id", type=int, help="Only this bowler")
@with_appcontext
def show_stats(bowler_id):
    """Show averages and handicaps"""
    names = _bowler_names()
    rows = league_service.get_bowler_stats(bowler_id)

    if not rows:
        click.echo("No games bowled yet.")
        return

    click.echo(f"{'Bowler':<20} {'Games':>5} {'Avg':>7} {'HDCP':>5} {'High':>5}")
    for s in rows:
        click.echo(
            f"{names.get(s.bowler_id, s.bowler_id):<20} {s.total_games:>5} "
            f"{s.average:>7.1f} {s.handicap:>5} {s.high_game:>5}"
        )

    if bowler_id is None:
        team = league_service.get_team_summary()
        click.echo(
            f"\nTeam average {team['team_average']:.1f}, "
            f"high game {team['team_high_game']}, {team['total_games']} games"
        )


# Leaderboard Commands
@cli.group()
def leaderboard():
    """Prediction leaderboard"""
    pass


@leaderboard.command("show")
@click.option("--week", "week_number", type=int, help="Only this week")
@with_appcontext
def show_leaderboard(week_number):
    """Show the prediction leaderboard"""
    try:
        if week_number is None:
            entries = league_service.get_leaderboard()
            click.echo("🏆 All-time Prediction Leaderboard")
        else:
            found = Week.query.filter_by(week_number=week_number).first()
            if not found:
                click.echo(f"❌ Week {week_number} not found!")
                return
            entries = league_service.get_weekly_leaderboard(found.id)
            click.echo(f"🏆 Week {week_number} Prediction Leaderboard")
    except LeagueException as e:
        click.echo(f"❌ {e.user_message}")
        return

    click.echo("=" * 40)
    if not entries:
        click.echo("No scored predictions yet.")
        return

    names = _bowler_names()
    for position, entry in enumerate(entries, start=1):
        click.echo(
            f"  {position:>2}. {names.get(entry.bowler_id, entry.bowler_id):<20} "
            f"{entry.total_points:>4} pts  avg diff {entry.avg_difference:.1f} "
            f"({entry.predictions_count} predictions)"
        )


# Database Commands
@cli.group()
def db_cmd():
    """Database commands"""
    pass


@db_cmd.command("init")
@with_appcontext
def init_db():
    """Initialize database tables"""
    try:
        db.create_all()
        click.echo("✅ Database tables created successfully!")
    except SQLAlchemyError as e:
        click.echo(f"❌ Error initializing database: {str(e)}")


@db_cmd.command()
@with_appcontext
def reset():
    """⚠️  DANGER: Drop and recreate all tables"""
    if not click.confirm("This will DELETE ALL DATA. Are you sure?"):
        click.echo("Cancelled.")
        return

    try:
        db.drop_all()
        db.create_all()
        click.echo("✅ Database reset successfully!")
    except SQLAlchemyError as e:
        click.echo(f"❌ Error resetting database: {str(e)}")


# Info Commands
@cli.command()
@with_appcontext
def status():
    """Show application status"""
    click.echo("🎳 Bowling League Status")
    click.echo("=" * 40)

    # Database connection
    try:
        db.session.execute(text("SELECT 1"))
        click.echo("✅ Database: Connected")
    except SQLAlchemyError as e:
        click.echo(f"❌ Database: Error - {str(e)}")
        return

    current_week = Week.get_current_week()
    if current_week:
        click.echo(
            f"✅ Current Week: {current_week.week_number} ({current_week.status})"
        )
    else:
        click.echo("⚠️  Current Week: None created")

    bowler_count = Bowler.query.filter_by(is_active=True).count()
    click.echo(f"👥 Active Bowlers: {bowler_count}")

    game_count = Game.query.filter(Game.score.isnot(None)).count()
    click.echo(f"🎳 Games Bowled: {game_count}")

    prediction_count = Prediction.query.count()
    click.echo(f"🔮 Predictions: {prediction_count}")


if __name__ == "__main__":
    with app.app_context():
        cli()
