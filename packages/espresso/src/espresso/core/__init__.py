"""Site model core: route tree, builder, walker and derivation passes.

Nothing in this package touches the filesystem.
"""
