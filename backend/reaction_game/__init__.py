from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from reaction_game.config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from reaction_game.routes import main
    flask_app.register_blueprint(main)

    from reaction_game.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    from reaction_game.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # One controller per app; the leaderboard is read from the store on first use
    from reaction_game.services.game import install_controller, get_controller
    install_controller(flask_app)

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import reaction_game.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            install_controller(flask_app)
            print('Database has been reset!')

    @click.command('rankings-show')
    def rankings_show_command():
        """Prints the leaderboard."""
        with flask_app.app_context():
            rankings = get_controller(flask_app).rankings
            if not rankings:
                print('No records yet.')
                return
            for idx, entry in enumerate(rankings, 1):
                print(f"#{idx:<3} {entry.time_ms:>5}ms  {entry.achieved_at.date().isoformat()}")

    @click.command('rankings-clear')
    @click.option('--yes', is_flag=True, help='Skip the confirmation prompt.')
    def rankings_clear_command(yes):
        """Clears the leaderboard after confirmation."""
        confirmed = yes or click.confirm('Reset the leaderboard?', default=False)
        with flask_app.app_context():
            if get_controller(flask_app).clear_rankings(confirmed):
                print('Leaderboard cleared.')
            else:
                print('Leaderboard kept.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(rankings_show_command)
    flask_app.cli.add_command(rankings_clear_command)

    return flask_app
