"""
itemminer — Getting Started
============================

The simplest possible example: mine frequent itemsets from a
one-hot encoded pandas DataFrame, then look at them level by level.
"""

import pandas as pd

from itemminer import Apriori, apriori

# A small market-basket dataset (5 transactions, 5 items)
data = {
    "bread": [1, 1, 0, 1, 1],
    "butter": [1, 0, 1, 1, 0],
    "milk": [1, 1, 1, 0, 1],
    "eggs": [0, 1, 1, 0, 1],
    "cheese": [0, 0, 1, 0, 0],
}
df = pd.DataFrame(data).astype(bool)

print("Input DataFrame:")
print(df.to_string())
print()

# ── 1. Mine frequent itemsets ───────────────────────────────────────────────
freq = apriori(df, min_frequency=0.4, use_colnames=True)

print("Frequent itemsets (min_frequency=0.4):")
print(freq.sort_values("support", ascending=False).to_string(index=False))
print()

# ── 2. Absolute support and the object API ──────────────────────────────────
miner = Apriori(df, min_support=3, verbose=1)
result = miner.run()

print()
for length, itemsets in result.levels().items():
    print(f"Level {length}:")
    for itemset in itemsets:
        print("  " + itemset.to_string(result.labels))
