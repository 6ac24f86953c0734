from stackview.integrations.stack_api.abc import StackApi, UpdateStrategy
from stackview.integrations.stack_api.dry_run import DryRunStackApi
from stackview.integrations.stack_api.fake import FakeStackApi
from stackview.integrations.stack_api.real import RealStackApi

__all__ = ["DryRunStackApi", "FakeStackApi", "RealStackApi", "StackApi", "UpdateStrategy"]
