import sys
import random
import argparse
from pathlib import Path

# Run from a checkout: make `core` importable.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.tree_store import TreeStore

AISLES = [
    "Dairy", "Bakery", "Fruit & Veg", "Meat & Fish", "Frozen",
    "Drinks", "Household", "Baby", "Pet", "World Foods",
]

PRODUCTS = [
    "Milk", "Cheese", "Butter", "Yoghurt", "Bread", "Bagels", "Croissants",
    "Apples", "Bananas", "Carrots", "Onions", "Chicken", "Salmon", "Mince",
    "Peas", "Ice cream", "Orange juice", "Coffee", "Tea", "Washing up liquid",
    "Kitchen roll", "Nappies", "Cat food", "Rice", "Noodles", "Soy sauce",
]

def build_random_list(store: TreeStore, count: int, seed: int | None = None) -> list[str]:
    """
    Add count random products under random aisle headings.
    Returns the ids of every item created.
    """
    rng = random.Random(seed)
    ids = []
    headings = [store.add_root(rng.choice(AISLES)) for _ in range(max(1, count // 10))]
    ids.extend(headings)

    for i in range(count):
        parent_id = rng.choice(ids)
        new_id = store.add_child(parent_id, rng.choice(PRODUCTS), quantity=rng.randint(1, 4))
        if rng.random() < 0.3:
            store.set_done(new_id, True)
        ids.append(new_id)
        if (i + 1) % 100 == 0:
            print(f"Created {i+1} items...")

    return ids

def main(argv=None):
    parser = argparse.ArgumentParser(description="Fill a BasketPad list file with random items")
    parser.add_argument("list_file", help="Path of the list JSON file (created if missing)")
    parser.add_argument("--count", type=int, default=50, help="Number of products to add")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args(argv)

    store = TreeStore(args.list_file)
    status = store.load()
    print(f"Loaded list ({status.value}), {len(store)} items")

    build_random_list(store, args.count, seed=args.seed)
    print(f"Done; {len(store)} items written to {store.path}")

if __name__ == '__main__':
    main()
