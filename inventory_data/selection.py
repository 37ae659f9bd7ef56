"""Ordered selection state for the series checklist."""


def toggle(selection, name):
    """Remove `name` if selected, otherwise append it.

    Args:
        selection (Sequence[str]): Current selection in insertion order.
        name (str): Series name to toggle.

    Returns:
        list[str]: New selection; `selection` is not modified.
    """
    if name in selection:
        return [item for item in selection if item != name]
    return [*selection, name]


def apply_checklist_change(selection, checked):
    """Reconcile a checklist's new value with the ordered selection.

    A checklist reports its value as an unordered set, so each name that was
    added or removed is toggled to keep insertion order intact.
    """
    selection = list(selection or [])
    checked = list(checked or [])
    removed = [name for name in selection if name not in checked]
    added = [name for name in checked if name not in selection]
    for name in removed + added:
        selection = toggle(selection, name)
    return selection
