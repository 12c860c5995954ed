"""
Lab management screen state.

LabAdminView holds what the admin screen shows (the lab list, loading flag,
dialog state) and turns user actions into store calls. Every successful
mutation is followed by a full refetch; the local list is never patched.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from labadmin.core.models import (
    DEFAULT_CAPACITY,
    CreateMode,
    EditMode,
    Lab,
    LabForm,
    Mode,
)
from labadmin.core.notify import Notifier, create_notifier
from labadmin.store.base import LabStore, StoreError

logger = logging.getLogger(__name__)

COLUMNS = ("Name", "Building", "Capacity", "Facilities", "Status", "Actions")
EMPTY_MESSAGE = "No labs found"
DELETE_PROMPT = "Are you sure you want to delete this lab?"

ConfirmFn = Callable[[str], bool]


@dataclass
class TableRow:
    """One rendered row of the labs table."""

    lab: Optional[Lab] = None
    placeholder: Optional[str] = None
    colspan: int = 1
    cells: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_lab(cls, lab: Lab) -> "TableRow":
        return cls(
            lab=lab,
            cells={
                "name": lab.name,
                "building": lab.building,
                "capacity": f"{lab.capacity} seats",
                "facilities": lab.facilities,
                "status": lab.status_label,
            },
        )

    @classmethod
    def empty(cls) -> "TableRow":
        return cls(placeholder=EMPTY_MESSAGE, colspan=len(COLUMNS))


class LabAdminView:
    """State and actions of the lab management screen."""

    def __init__(
        self,
        store: LabStore,
        notifier: Optional[Notifier] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the view.

        Args:
            store: Query client for the labs collection
            notifier: Channel for success/error messages
            on_change: Called after every successful mutation
        """
        self.store = store
        self.notifier = notifier or create_notifier()
        self.on_change = on_change

        self.labs: list[Lab] = []
        self.loading = True
        # False until a fetch has succeeded
        self.loaded = False
        self.dialog_open = False
        self.mode: Mode = CreateMode()

    # --- Loading ---

    def mount(self) -> "LabAdminView":
        """Initial load of the screen."""
        self.fetch_labs()
        return self

    def fetch_labs(self) -> bool:
        """
        Replace the lab list with the store's current contents.

        On failure the previous list is kept. Loading is cleared either way.

        Returns:
            True if the list was refreshed
        """
        try:
            labs = self.store.list_labs()
        except StoreError as e:
            logger.warning(f"Fetching labs failed: {e}")
            self.notifier.error("Failed to fetch labs")
            return False
        else:
            self.labs = labs
            self.loaded = True
            return True
        finally:
            self.loading = False

    # --- Dialog ---

    @property
    def editing_lab(self) -> Optional[Lab]:
        """Lab being edited, or None in create mode."""
        if isinstance(self.mode, EditMode):
            return self.mode.lab
        return None

    def open_create(self) -> None:
        self.mode = CreateMode()
        self.dialog_open = True

    def open_edit(self, lab: Lab) -> None:
        self.mode = EditMode(lab)
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False

    @property
    def dialog_title(self) -> str:
        return "Edit Lab" if isinstance(self.mode, EditMode) else "Add New Lab"

    @property
    def submit_label(self) -> str:
        return "Update Lab" if isinstance(self.mode, EditMode) else "Add Lab"

    @property
    def form_defaults(self) -> LabForm:
        """Values the dialog form starts with."""
        if isinstance(self.mode, EditMode):
            return LabForm.from_lab(self.mode.lab)
        return LabForm(capacity=DEFAULT_CAPACITY, has_projector=True, has_ac=True)

    # --- Actions ---

    def submit(self, form: Union[LabForm, Mapping[str, Any]]) -> bool:
        """
        Save the dialog form.

        Edit mode updates the edited lab's fields and leaves its availability
        alone. Create mode inserts a new lab that starts out available. On
        failure the dialog stays open.

        Args:
            form: Parsed LabForm or raw submitted form values

        Returns:
            True if the store accepted the change
        """
        if not isinstance(form, LabForm):
            form = LabForm.from_form(form)
        record = form.to_record()

        if isinstance(self.mode, EditMode):
            lab_id = self.mode.lab.id
            try:
                self.store.update(lab_id, record)
            except StoreError as e:
                logger.warning(f"Updating lab {lab_id} failed: {e}")
                self.notifier.error("Failed to update lab")
                return False
            self.notifier.success("Lab updated successfully")
        else:
            record["is_available"] = True
            try:
                self.store.insert(record)
            except StoreError as e:
                logger.warning(f"Adding lab failed: {e}")
                self.notifier.error("Failed to add lab")
                return False
            self.notifier.success("Lab added successfully")

        self._changed()
        self.dialog_open = False
        self.mode = CreateMode()
        return True

    def delete(self, lab_id: str, confirm: ConfirmFn) -> bool:
        """
        Delete a lab after the user confirms.

        Args:
            lab_id: Id of the lab to delete
            confirm: Yes/no prompt; a False answer aborts with no store call

        Returns:
            True if the lab was deleted
        """
        if not confirm(DELETE_PROMPT):
            return False

        try:
            self.store.delete(lab_id)
        except StoreError as e:
            logger.warning(f"Deleting lab {lab_id} failed: {e}")
            self.notifier.error("Failed to delete lab")
            return False

        self.notifier.success("Lab deleted successfully")
        self._changed()
        return True

    def toggle_availability(self, lab_id: str, current: bool) -> bool:
        """
        Flip a lab's availability.

        Args:
            lab_id: Id of the lab
            current: Availability as currently displayed

        Returns:
            True if the store accepted the change
        """
        try:
            self.store.update(lab_id, {"is_available": not current})
        except StoreError as e:
            logger.warning(f"Toggling availability of lab {lab_id} failed: {e}")
            self.notifier.error("Failed to update availability")
            return False

        self._changed()
        return True

    def _changed(self) -> None:
        """Announce a successful mutation and resync the list."""
        if self.on_change is not None:
            try:
                self.on_change()
            except Exception as e:
                logger.error(f"Change listener failed: {e}")
        self.fetch_labs()

    # --- Presentation ---

    def find_lab(self, lab_id: str) -> Optional[Lab]:
        """Look up a lab in the current list."""
        for lab in self.labs:
            if lab.id == lab_id:
                return lab
        return None

    def rows(self) -> list[TableRow]:
        """Table rows; a single placeholder row when there are no labs."""
        if not self.labs:
            return [TableRow.empty()]
        return [TableRow.for_lab(lab) for lab in self.labs]
