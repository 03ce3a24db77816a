import asyncio
import logging
from concurrent.futures import Future
from contextlib import nullcontext
from datetime import datetime, timedelta
from typing import Optional

from flask import Flask, current_app, has_app_context

from synciot.db import db
from synciot.repositories.rover_repository import RoverRepository
from synciot.utils.async_runner import AsyncLoopThread
from synciot.utils.clock import utcnow

logger = logging.getLogger(__name__)


class LivenessMonitor:
    """
    Tarefa recorrente que rebaixa para offline os rovers sem contato há mais
    de `threshold` segundos. Só faz a transição online -> offline; a volta
    para online é responsabilidade de quem recebe os dados do rover.
    """

    def __init__(self, app: Flask = None, interval: float = None, threshold: float = None,
                 runner: AsyncLoopThread = None):
        self.app = app
        self.interval = interval
        self.threshold = threshold
        self.runner = runner
        self.repository = RoverRepository()
        self.running = False
        self._future: Optional[Future] = None
        self._owns_runner = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        self.app = app
        if self.interval is None:
            self.interval = app.config.get("LIVENESS_CHECK_INTERVAL", 10)
        if self.threshold is None:
            self.threshold = app.config.get("OFFLINE_THRESHOLD", 30)

    def _app_context(self):
        if has_app_context() and current_app._get_current_object() is self.app:
            return nullcontext()
        return self.app.app_context()

    def sweep(self, now: datetime = None) -> int:
        """
        Uma passada de verificação. Falhas do banco são registradas e tratadas
        como "nenhum rover afetado"; a próxima execução tenta de novo.
        """
        cutoff = (now or utcnow()) - timedelta(seconds=self.threshold)
        with self._app_context():
            try:
                count = self.repository.mark_stale_offline(cutoff)
            except Exception:
                logger.exception("Falha na verificação de rovers offline (cutoff=%s)", cutoff.isoformat())
                db.session.rollback()
                return 0

        if count > 0:
            logger.info("%s rover(s) marcado(s) como offline", count)
        else:
            logger.debug("Nenhum rover ficou offline nesta verificação")
        return count

    async def _run(self):
        logger.info("Verificador de rovers offline iniciado (intervalo=%ss, limite=%ss)",
                    self.interval, self.threshold)
        try:
            while self.running:
                try:
                    await asyncio.to_thread(self.sweep)
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("Erro inesperado no verificador de rovers offline")
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            logger.info("Verificador de rovers offline cancelado")
            raise

    def start(self) -> Future:
        if not self.app:
            raise RuntimeError("LivenessMonitor precisa de app (chame init_app ou passe app no construtor).")
        if self.is_running:
            logger.info("Verificador de rovers offline já está ativo")
            return self._future

        if self.runner is None:
            self.runner = AsyncLoopThread()
            self._owns_runner = True

        self.running = True
        self._future = self.runner.run_coro(self._run())
        return self._future

    def stop(self):
        """Cancela a tarefa recorrente. Uma varredura em andamento termina normalmente."""
        self.running = False
        if self._future is not None:
            self._future.cancel()
            self._future = None
        if self._owns_runner and self.runner is not None:
            self.runner.stop()
            self.runner = None
            self._owns_runner = False
        logger.info("Verificador de rovers offline parado")

    @property
    def is_running(self) -> bool:
        return self._future is not None and not self._future.done()
