"""
Tiny Little Words Server - Main Entry Point

This is the main entry point for the puzzle server.
It initializes the game service and starts the Flask-SocketIO application.
"""

from tinywords import create_app
from tinywords.config import Config, validate_word_list_integrity
from tinywords.services.game_service import initialize_game_service
from tinywords.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        validate_word_list_integrity()
        print("✓ Fallback word list validated")

        game_service = initialize_game_service(Config)
        if game_service.catalog is not None:
            print("✓ Word catalog connected")
        else:
            print("✗ Word catalog not configured - rounds will use the fallback word list")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Tiny Little Words server starting")

        print(f"\nStarting Tiny Little Words server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Tiny Little Words server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
