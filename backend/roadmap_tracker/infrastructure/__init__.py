"""Infrastructure implementations of the storage interfaces."""
