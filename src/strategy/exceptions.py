"""Rules engine exceptions."""


class StrategyError(ValueError):
    """Base error for rejected engine inputs."""


class InvalidStageError(StrategyError):
    """Stage is not an integer in [MIN_STAGE, MAX_STAGE]."""

    def __init__(self, stage: object) -> None:
        self.stage = stage
        super().__init__(f"stage must be an integer 1-5, got {stage!r}")
