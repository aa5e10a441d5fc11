from enum import Enum
from threading import Thread, Lock
from typing import Optional
import logging
from delayproof.numberish import to_positive
from delayproof.vdf.trade import generate_vdf


class Phase(Enum):
    PENDING = 0
    EVALUATION = 1
    PROOF = 2
    DONE = 3
    FAILED = 4


class VDFComputation:
    # evaluator and prover both report from 0, the second 0 starts the proof phase
    def __init__(self, logger: Optional[logging.Logger] = None, **kwargs):
        self.logger = logger or logging.getLogger(__name__)
        self.kwargs = kwargs
        self.T = to_positive(kwargs.get("T"))
        self.phase = Phase.PENDING
        self.iteration = -1
        self.lock = Lock()
        self.error: Optional[BaseException] = None
        self.proof: Optional[str] = None
        self.done = False
        self.thread = Thread(target=self.run, daemon=True)
        self.thread.start()

    def on_progress(self, i: int):
        with self.lock:
            if i == 0:
                self.phase = (
                    Phase.EVALUATION if self.phase == Phase.PENDING else Phase.PROOF
                )
            self.iteration = i

    @property
    def progress(self) -> float:
        with self.lock:
            if self.phase == Phase.DONE:
                return 1.0
            if self.phase == Phase.EVALUATION:
                return (self.iteration + 1) / (2 * self.T)
            if self.phase == Phase.PROOF:
                return (self.T + self.iteration + 1) / (2 * self.T)
            return 0.0

    def finish(self, phase: Phase, proof=None, error=None):
        with self.lock:
            self.proof = proof
            self.error = error
            self.phase = phase
            self.done = True

    def run(self):
        try:
            proof = generate_vdf(
                on_progress=self.on_progress, logger=self.logger, **self.kwargs
            )
        except Exception as e:
            self.logger.exception("VDF computation failed")
            self.finish(Phase.FAILED, error=e)
            return
        self.finish(Phase.DONE, proof=proof)

    def get(self, timeout: Optional[float] = None) -> str:
        self.thread.join(timeout)
        with self.lock:
            if not self.done:
                raise TimeoutError("VDF computation still running")
            if self.error is not None:
                raise self.error
            return self.proof
