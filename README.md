# structkit

A small collection of general-purpose data structures in pure Python, with no
third-party dependencies.

## Installation

```
pip install structkit
```

To run the test suite, install the test extra and run pytest:

```
pip install "structkit[test]"
pytest
```

## What is inside

### `structkit.index.Index`

A non-negative integer wrapped in its own type, so that indexes into different
containers are not mixed up by accident. It works with `int()`, can be used as
a list index, and hashes like its raw value, so it can be a dictionary key. Two
`Index` objects are equal when their raw values are equal. Negative values
raise `ValueError`, and values that are not integers raise `TypeError`.

```python
from structkit.index import Index

ix = Index(2)
["a", "b", "c"][ix]   # "c"
str(ix)               # "2"
```

### `structkit.opt_vec.OptVec`

A sparse, growable vector. When an item is removed, its slot is freed. The
next insert reuses the slot that was freed most recently.

```python
from structkit.opt_vec import OptVec

v = OptVec()
a = v.insert("first")      # 0
b = v.insert("second")     # 1
v.remove(a)
c = v.insert("third")      # reuses 0
list(v)                    # ["third", "second"]
len(v)                     # 2
v.get(5)                   # IndexError: out of bounds
```

The other operations:

- `reserve_index()` reserves a slot that you fill later with `set()` or `v[ix] = item`.
- `insert_with_ix(factory)` calls `factory(index)`. The factory returns `(item, extra)`. The method stores `item` and returns `(index, extra)`.
- `get(ix)` returns `None` for an empty slot.
- `v[ix]` raises `IndexError` for an empty slot.

### `structkit.dependency_graph`

`DependencyGraph` is a dependency graph built for topological sorting. It may
contain cycles. The sort still finishes, because it breaks each cycle on the
smallest key.

```python
from structkit.dependency_graph import dependency_graph

graph = dependency_graph((1, 0), (3, 2))   # 1 -> 0, 3 -> 2
graph.topo_sort([0, 1, 2, 3])              # [1, 0, 3, 2]
```

The other operations:

- `insert_dependency(first, second)` returns `False` if the edge was already present.
- `remove_dependency(first, second)` reports whether the edge was found. It drops nodes that are left with no edges.
- `keep_only(keys)` removes every edge that touches a key outside `keys`.
- `kept_only(keys)` does the same to a copy of the graph and returns the copy.

Iterating over a graph yields `(key, Node)` pairs in key order. Each `Node`
lists its incoming edges in `ins` and its outgoing edges in `out`.

### `structkit.hash_map_tree.HashMapTree`

A tree in which each node holds a value and a dict of branches. A node is
addressed by a path of keys.

```python
from structkit.hash_map_tree import HashMapTree

tree = HashMapTree(0, default_factory=int)
tree.set([1, 2, 4], 7)
tree.get([1, 2, 4])          # 7
tree.get([9])                # None
tree.update_values(lambda v: v * 2)
dict(tree.items())           # {(): 0, (1,): 0, (1, 2): 0, (1, 2, 4): 14}
```

When a path is created, the nodes added on the way take their value from
`default_factory`, or `None` if no factory was given. The other operations:

- `set_with(path, value, cons_missing)` sets a value and builds missing nodes with `cons_missing`.
- `get_or_create_node_path_with(path, cons_missing)` creates missing nodes and passes the path built so far to `cons_missing`.
- `remove(path)` deletes a subtree and returns the value at its root.
- `value_or_set_with(cons)` sets a node's value to `cons()` if the value is `None`, and then returns the value.
- `HashMapTree.from_items(pairs)` builds a tree from `(path, value)` pairs.

`zip(other)` joins two trees into one. Each node of the result holds an
`AtLeastOneOfTwo` value. Its `has_first` and `has_second` properties tell
whether the node came from the first tree, the second tree, or both.

### `structkit.text`

Typed text coordinates that count characters:

- `Index`: a character index.
- `ByteIndex`: a byte index into the UTF-8 encoding.
- `Size`: a length in characters.
- `Span`: a start index plus a size.
- `TextLocation`: a line and a column.
- `TextChange`: a text edit.

```python
from structkit.text import Index, Span, TextLocation, TextChange

Span.from_range(2, 5).slice("zazó黄ć")                       # "zó黄"
str(TextLocation.from_index("first\nsecond", Index(9)))     # "1:3"
TextChange.insert(Index(0), ">> ").applied("text")          # ">> text"
```

Subtraction that would go below zero raises `ValueError`. To get `None`
instead, use `checked_sub`.

`TextChange.applied` reads its start and end positions as offsets into the
UTF-8 encoding of the target string.

These helpers work on newlines:

- `newline_indices`: character positions of newlines.
- `newline_byte_indices`: byte positions of newlines.
- `rev_newline_byte_indices`: byte positions of newlines, starting from the end of the text.
- `split_to_lines`: splits text into lines, handling both LF and CRLF endings.

## What it does not do

The package has no interval-set or interval-tree structure for storing runs of
integers. It has no command-line tool.