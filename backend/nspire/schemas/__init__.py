"""Pydantic schemas for the NSPIRE compliance engine."""

from nspire.schemas.base import *
from nspire.schemas.taxonomy import *
from nspire.schemas.inspection import *
from nspire.schemas.evaluation import *
from nspire.schemas.report import *
