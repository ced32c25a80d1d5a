"""ShoppingList aggregate: a named, ordered sequence of tasks."""
from dataclasses import dataclass, replace
from typing import Optional, Tuple
from basket.domain.Task import Task


@dataclass(frozen=True)
class ShoppingList:
    id: str
    name: str
    tasks: Tuple[Task, ...] = ()

    def get_task(self, task_id: str) -> Optional[Task]:
        '''
        Returns the task with the given id, or None.
        '''
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def has_task(self, task_id: str) -> bool:
        return self.get_task(task_id) is not None

    def with_tasks(self, tasks) -> "ShoppingList":
        '''
        Returns a copy holding the given task sequence.
        '''
        return replace(self, tasks=tuple(tasks))

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(task) for task in self.tasks)
        return f"Shopping List {self.name} ({self.id}):\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "tasks": [task.to_dict() for task in self.tasks],
        }
