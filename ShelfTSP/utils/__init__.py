from ShelfTSP.utils.taxonomy import AlgorithmFamily, AlgorithmType

__all__ = ["AlgorithmFamily", "AlgorithmType"]
