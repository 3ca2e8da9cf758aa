#!/usr/bin/env python3
"""
Script di gestione del server API Znote.

Uso:
    python manage.py runserver   # Avvia il server di sviluppo
    python manage.py create-db   # Crea le tabelle del database
    python manage.py --env production create-db
"""

import argparse
import logging

from sqlalchemy.exc import OperationalError as SAOperationalError

from znote import create_app
from znote.extensions import db
from config import get_config

# ---------------------------------------------------------------------
# Logger per la CLI (fuori dal contesto Flask)
# ---------------------------------------------------------------------
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    cli_logger.addHandler(handler)


# ---------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------
def _import_all_models() -> None:
    """Garantisce che tutti i modelli siano registrati prima di create_all()."""
    import znote.models  # noqa: F401


# ---------------------------------------------------------------------
# Comandi
# ---------------------------------------------------------------------
def create_db(app) -> bool:
    """Crea tutte le tabelle definite dai modelli SQLAlchemy."""
    with app.app_context():
        cli_logger.info("Creazione tabelle del database...")
        try:
            _import_all_models()
            db.create_all()
        except SAOperationalError as e:
            cli_logger.error("Errore di connessione o di permessi sul database: %s", e)
            cli_logger.info(
                "Verifica che il database sia attivo e che l'utente '%s' abbia accesso a '%s'.",
                app.config.get("DB_USER"),
                app.config.get("DB_NAME"),
            )
            return False
        cli_logger.info("Database creato con successo.")
        return True


def run_server(app) -> None:
    """Avvia il server di sviluppo Flask."""
    host = app.config.get("HOST", "0.0.0.0")
    port = int(app.config.get("PORT", 5000))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Avvio del server su http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)


# ---------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Gestione del server API Znote.")
    parser.add_argument(
        "command",
        choices=["runserver", "create-db"],
        help="Comando da eseguire.",
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Configurazione da caricare (development, production, testing). "
        "Di default la variabile d'ambiente ENV.",
    )

    args = parser.parse_args(argv)

    app = create_app(get_config(args.env))

    if args.command == "runserver":
        run_server(app)
        return 0
    return 0 if create_db(app) else 1


if __name__ == "__main__":
    raise SystemExit(main())
