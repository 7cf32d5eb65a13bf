from partsflow.models.supplier import Supplier
from partsflow.models.category import Category
from partsflow.models.part import Part
from partsflow.models.movement import Movement
from partsflow.models.report import Report
