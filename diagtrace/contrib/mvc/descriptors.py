import attr

from .processor import controller_full_name


@attr.s(frozen=True, slots=True)
class ActionDescriptor(object):
    """Describes an action that is not backed by a controller (a page handler, an endpoint...)."""

    display_name = attr.ib(type=str)


@attr.s(frozen=True, slots=True)
class ControllerActionDescriptor(ActionDescriptor):
    """Describes the method ``action_name`` of the controller ``controller_name``."""

    controller_name = attr.ib(type=str, kw_only=True)
    action_name = attr.ib(type=str, kw_only=True)

    @classmethod
    def for_controller(cls, controller_type, action_name):
        """Build the descriptor of ``controller_type.action_name`` from the controller class."""
        controller_name = controller_full_name(controller_type)
        return cls(
            display_name="%s.%s" % (controller_name, action_name),
            controller_name=controller_name,
            action_name=action_name,
        )
