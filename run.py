# run.py
import logging
import os
import signal
import sys

from config import Config
from synciot.app import create_app
from synciot.db import close_store, db, wait_for_store
from synciot.services.liveness_service import LivenessMonitor
from synciot.utils.async_runner import AsyncLoopThread
from synciot.utils.log.log import setup_logger

setup_logger()
logger = logging.getLogger(__name__)

host = os.environ.get("HOST", "0.0.0.0")
port = int(os.environ.get("PORT", 3001))


def main():
    app = create_app(Config)

    with app.app_context():
        # sem banco não há serviço: falha aqui é fatal
        wait_for_store(app.config["STORE_CONNECT_RETRIES"], app.config["STORE_CONNECT_BACKOFF"])
        db.create_all()

    async_loop = AsyncLoopThread()
    monitor = LivenessMonitor(app, runner=async_loop)
    monitor.start()
    logger.info("Rovers sem dados por %ss serão marcados como offline", monitor.threshold)

    def shutdown(signum, frame):
        logger.info("Sinal %s recebido, encerrando", signum)
        monitor.stop()
        async_loop.stop()
        with app.app_context():
            close_store()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    logger.info("Servidor em http://%s:%s", host, port)
    # use_reloader=False evita duplicar o verificador em outro processo
    app.run(host=host, port=port, debug=False, use_reloader=False)


if __name__ == '__main__':
    main()
