from .apriori import Apriori, apriori
from .errors import AbortError
from .itemset import DenseItemset, Itemset, OneItemset, SmallDenseItemset, SparseItemset
from .model import BaseModel, Miner
from .relation import BitVector, TransactionRelation, as_relation
from .result import AprioriResult
from .transactions import from_transactions

__all__ = [
    "apriori",
    "Apriori",
    "AprioriResult",
    "AbortError",
    "Itemset",
    "OneItemset",
    "SparseItemset",
    "DenseItemset",
    "SmallDenseItemset",
    "BitVector",
    "TransactionRelation",
    "as_relation",
    "from_transactions",
    "BaseModel",
    "Miner",
]
