from abc import ABCMeta, abstractmethod
from typing import TypeVar, Generic

ChallengeT = TypeVar("ChallengeT")
EvalAndProofT = TypeVar("EvalAndProofT")


class AbstractVDF(Generic[ChallengeT, EvalAndProofT], metaclass=ABCMeta):
    @abstractmethod
    def eval_and_prove(self, challenge: ChallengeT) -> EvalAndProofT:
        pass

    @abstractmethod
    def verify(self, challenge: ChallengeT, proof: EvalAndProofT) -> bool:
        pass

    @abstractmethod
    def extract_y(self, proof: EvalAndProofT) -> bytes:
        pass
