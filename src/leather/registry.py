from __future__ import annotations


def material_key(material: str) -> str:
    return material.strip().lower()


class LeatherLabelRegistry:
    """
    Batch-scoped mapping from material code to "Cuero {n}".

    Labels are handed out in first-encounter order starting at 1; the counter
    is shared by every leather family. Create one registry per processing
    batch. Documents merged into one batch share one registry so a code seen
    in the first document keeps its label in the second.
    """

    def __init__(self) -> None:
        self._labels: dict[str, str] = {}

    def label_for(self, material: str) -> str:
        key = material_key(material)
        label = self._labels.get(key)
        if label is None:
            label = f"Cuero {len(self._labels) + 1}"
            self._labels[key] = label
        return label

    def get(self, material: str) -> str | None:
        return self._labels.get(material_key(material))

    def labels(self) -> dict[str, str]:
        return dict(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, material: object) -> bool:
        return isinstance(material, str) and material_key(material) in self._labels
