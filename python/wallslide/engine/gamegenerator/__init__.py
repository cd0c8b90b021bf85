from wallslide.engine.gamegenerator.generator import (
    AttemptReport,
    BatchResult,
    GameGenerator,
    GenerationExhausted,
)

__all__ = ["AttemptReport", "BatchResult", "GameGenerator", "GenerationExhausted"]
