from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from molegame.main import main
    flask_app.register_blueprint(main)

    from molegame.api.game import game_api
    flask_app.register_blueprint(game_api, url_prefix='/api/game')

    # Register Socket.IO event handlers on the freshly initialized server
    from molegame.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Composition root: one game per application, reachable via app.extensions
    from molegame.games import EXTENSION_KEY, build_game
    flask_app.extensions[EXTENSION_KEY] = build_game(flask_app, socketio)

    @click.command('simulate-round')
    @click.option('--seed', type=int, default=None, help='Seed for mole placement.')
    def simulate_round_command(seed):
        """Plays one headless round on a manual clock and prints the result."""
        import random
        from molegame.services.games.scheduler import ManualScheduler
        from molegame.view import LoggingView

        sim = build_game(
            flask_app,
            socketio,
            view=LoggingView(flask_app.logger),
            scheduler=ManualScheduler(),
            rng=random.Random(seed),
        )
        sim.view.dispatch_start()
        while sim.state.is_game_active:
            sim.scheduler.advance(sim.controller.tick_interval)
            # whack one mole per tick, lowest hole first
            occupied = [hole.id for hole in sim.state.holes if hole.has_mole]
            if occupied:
                sim.view.dispatch_hole_click(occupied[0])
        print(f'Round over: score={sim.state.score} moles_spawned={sim.controller.moles_spawned}')

    flask_app.cli.add_command(simulate_round_command)

    return flask_app
