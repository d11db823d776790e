from labcatalog.models.user import User
from labcatalog.models.category import Category
from labcatalog.models.lab_test import LabTest
