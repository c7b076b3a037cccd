"""Service layer for saved places."""

import time
from typing import List

from ecomission.core.store import LocalStore
from ecomission.places.models import SavedPlace, SavedPlaceCreate


class PlacesService:
    """Saved places are stored and replaced as a whole list."""

    def __init__(self, store: LocalStore):
        self.store = store

    def list_places(self) -> List[SavedPlace]:
        return self.store.load_places()

    def add_place(self, data: SavedPlaceCreate) -> SavedPlace:
        """Append a new place; its id is the creation time in epoch millis."""
        places = self.store.load_places()

        new_id = int(time.time() * 1000)
        existing = {p.id for p in places}
        while new_id in existing:
            new_id += 1

        place = SavedPlace(id=new_id, **data.model_dump())
        places.append(place)
        self.store.save_places(places)
        return place

    def replace_places(self, places: List[SavedPlace]) -> List[SavedPlace]:
        """Overwrite the list (the client's only edit/delete path)."""
        ids = [p.id for p in places]
        if len(ids) != len(set(ids)):
            raise ValueError("Saved place ids must be unique")
        self.store.save_places(places)
        return places
