"""CLI Commands"""

from aicommit.config import PreferenceStore
from aicommit.output import dim, print_success


def run_reset(store: PreferenceStore, ui, assume_yes: bool = False) -> int:
    """Delete saved settings, asking first unless ``assume_yes``."""
    if not store.exists():
        ui.write_line(f"No saved settings {dim(f'({store.path})')}")
        return 0

    if not assume_yes and not ui.confirm(f"Delete saved settings at {store.path}?"):
        ui.write_line("Reset aborted.")
        return 0

    store.delete()
    print_success(f"Deleted {store.path}")
    print(dim("Run aicommit again to choose a provider and model."))
    return 0
