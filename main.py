"""Main entry point for the awareness-quiz CLI."""

from awareness_quiz.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
