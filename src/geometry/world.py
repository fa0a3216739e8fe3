# src/geometry/world.py
from typing import Iterator, List
from core.interval import Interval
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class HittableList(Hittable):
    """
    A list of Hittable objects, searched linearly for the nearest hit.
    Read-only once rendering starts, so it can be shared by all workers.
    """
    def __init__(self, objects: List[Hittable] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, ray_t: Interval, rec: HitRecord) -> bool:
        hit_anything = False
        closest_so_far = ray_t.max
        for obj in self.objects:
            if obj.hit(ray, Interval(ray_t.min, closest_so_far), rec):
                hit_anything = True
                closest_so_far = rec.t
        return hit_anything
