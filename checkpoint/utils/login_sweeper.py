from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from checkpoint.utils.logging_config import get_logger

logger = get_logger(__name__)


class LoginAttemptSweeper:
    def __init__(self, guards, interval_seconds=60):
        self.guards = list(guards)
        self.interval_seconds = interval_seconds
        self.scheduler = BackgroundScheduler()
        
    def start(self):
        """Start the login attempt sweeper"""
        self.scheduler.add_job(
            func=self.sweep,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id='login_attempt_sweep',
            name='Evict stale login attempt records',
            replace_existing=True
        )
        
        self.scheduler.start()
        logger.info(f"Login attempt sweeper started (every {self.interval_seconds}s)")
        
    def stop(self):
        """Stop the login attempt sweeper"""
        self.scheduler.shutdown()
        logger.info("Login attempt sweeper stopped")
        
    def sweep(self):
        """Evict expired login attempt records from every guard"""
        return sum(guard.sweep() for guard in self.guards)
