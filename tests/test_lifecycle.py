import unittest

import pytest

from gatebind import InvalidArgumentError, Lifecycle, LifecycleStore, ServiceFactory


class Service: ...


class TestLifecycleControl(unittest.TestCase):
    factory: ServiceFactory

    def setUp(self):
        self.factory = ServiceFactory()

    def test_default_lifecycle_is_prototype(self):
        self.factory.register("service", Service)

        assert self.factory.is_prototype("service")
        assert not self.factory.is_singleton("service")
        assert self.factory.get_service_type("service") is Lifecycle.PROTOTYPE

    def test_register_singleton_returns_same_instance(self):
        self.factory.register("service", Service, lifecycle=Lifecycle.SINGLETON)
        s1 = self.factory.create("service")
        s2 = self.factory.create("service")
        assert s2 is s1, "SINGLETON should return the cached instance"

    def test_register_prototype_returns_new_instances(self):
        self.factory.register("service", Service)
        s1 = self.factory.create("service")
        s2 = self.factory.create("service")
        assert s2 is not s1, "PROTOTYPE should return new instances"

    def test_register_accepts_lifecycle_string(self):
        self.factory.register("service", Service, lifecycle="singleton")
        assert self.factory.is_singleton("service")

    def test_register_as_singleton(self):
        self.factory.register("service", Service)
        self.factory.register_as_singleton("service")

        assert self.factory.is_singleton("service")
        assert not self.factory.is_prototype("service")
        assert self.factory.create("service") is self.factory.create("service")

    def test_register_as_singleton_does_not_drop_built_instance(self):
        self.factory.register("service", Service, lifecycle="singleton")
        first = self.factory.create("service")

        self.factory.register_as_singleton("service")

        assert self.factory.create("service") is first

    def test_register_as_prototype(self):
        self.factory.register("service", Service, lifecycle="singleton")
        self.factory.register_as_prototype("service")

        assert self.factory.is_prototype("service")
        assert not self.factory.is_singleton("service")

    def test_prototype_then_singleton_builds_fresh_instance(self):
        self.factory.register("service", Service, lifecycle="singleton")
        first = self.factory.create("service")

        self.factory.register_as_prototype("service")
        self.factory.register_as_singleton("service")

        assert self.factory.create("service") is not first

    def test_change_service_type(self):
        self.factory.register("service", Service)

        self.factory.change_service_type("service", "singleton")
        assert self.factory.is_singleton("service")
        assert self.factory.get_service_type("service") is Lifecycle.SINGLETON
        assert self.factory.create("service") is self.factory.create("service")

        self.factory.change_service_type("service", Lifecycle.PROTOTYPE)
        assert self.factory.is_prototype("service")
        assert self.factory.get_service_type("service") is Lifecycle.PROTOTYPE
        assert self.factory.create("service") is not self.factory.create("service")

    def test_change_service_type_rejects_unknown_type(self):
        self.factory.register("service", Service)

        with pytest.raises(InvalidArgumentError, match="Invalid service type: bogus"):
            self.factory.change_service_type("service", "bogus")

        assert self.factory.is_prototype("service")

    def test_clear_singletons_rebuilds_on_next_create(self):
        self.factory.register("one", Service, lifecycle="singleton")
        self.factory.register("two", Service, lifecycle="singleton")
        one, two = self.factory.create("one"), self.factory.create("two")

        self.factory.clear_singletons()

        new_one, new_two = self.factory.create("one"), self.factory.create("two")
        assert new_one is not one
        assert new_two is not two

    def test_clear_singletons_turns_services_into_prototypes(self):
        self.factory.register("built", Service, lifecycle="singleton")
        self.factory.register("reserved", Service, lifecycle="singleton")
        self.factory.create("built")

        self.factory.clear_singletons()

        for name in ("built", "reserved"):
            assert not self.factory.is_singleton(name)
            assert self.factory.is_prototype(name)
            assert self.factory.get_service_type(name) is Lifecycle.PROTOTYPE
        assert self.factory.create("built") is not self.factory.create("built")

    def test_singleton_conditions_checked_every_call(self):
        state = {"enabled": True}
        self.factory.register("service", Service, lifecycle="singleton")
        self.factory.register_condition("enabled", lambda: state["enabled"])
        self.factory.associate_condition("service", "enabled")

        first = self.factory.create("service")
        state["enabled"] = False

        assert not self.factory.has("service")
        state["enabled"] = True
        assert self.factory.create("service") is first

    def test_singleton_not_built_when_conditions_fail(self):
        built = []
        factory = ServiceFactory(type_exists=lambda _: True, construct=lambda t, a: built.append(t) or object())
        factory.register("service", "svc", lifecycle="singleton")
        factory.register_condition("never", lambda: False)
        factory.associate_condition("service", "never")

        assert not factory.has("service")
        assert built == []

    def test_reregister_resets_singleton_instance(self):
        self.factory.register("service", Service, lifecycle="singleton")
        first = self.factory.create("service")

        self.factory.register("service", Service, lifecycle="singleton")

        assert self.factory.create("service") is not first


class TestLifecycleStore(unittest.TestCase):
    store: LifecycleStore

    def setUp(self):
        self.store = LifecycleStore()

    def test_unknown_service_is_prototype(self):
        assert self.store.is_prototype("x")
        assert self.store.lifecycle_of("x") is Lifecycle.PROTOTYPE

    def test_reserved_slot_is_singleton_but_unbuilt(self):
        self.store.register_as_singleton("x")

        assert self.store.is_singleton("x")
        assert not self.store.is_built("x")

    def test_get_instance_or_build_memoizes_singletons(self):
        self.store.register_as_singleton("x")
        calls = []

        def build():
            calls.append(1)
            return object()

        a = self.store.get_instance_or_build("x", build)
        b = self.store.get_instance_or_build("x", build)

        assert a is b
        assert len(calls) == 1
        assert self.store.is_built("x")

    def test_none_instance_counts_as_built(self):
        self.store.register_as_singleton("x")
        calls = []

        self.store.get_instance_or_build("x", lambda: calls.append(1))
        self.store.get_instance_or_build("x", lambda: calls.append(1))

        assert len(calls) == 1

    def test_get_instance_or_build_for_prototype_never_stores(self):
        a = self.store.get_instance_or_build("x", object)
        b = self.store.get_instance_or_build("x", object)

        assert a is not b
        assert not self.store.is_singleton("x")

    def test_failed_build_leaves_slot_unbuilt(self):
        self.store.register_as_singleton("x")

        def build():
            raise RuntimeError("constructor failed")

        with pytest.raises(RuntimeError):
            self.store.get_instance_or_build("x", build)
        assert not self.store.is_built("x")

    def test_register_as_prototype_removes_slot(self):
        self.store.register_as_singleton("x")
        self.store.get_instance_or_build("x", object)

        self.store.register_as_prototype("x")

        assert self.store.is_prototype("x")
        assert not self.store.is_built("x")

    def test_clear_singletons(self):
        self.store.register_as_singleton("x")
        self.store.register_as_singleton("y")
        self.store.get_instance_or_build("x", object)

        self.store.clear_singletons()

        assert not self.store.is_built("x")
        assert self.store.is_prototype("x"), "built slot should be discarded"
        assert self.store.is_prototype("y"), "reserved slot should be discarded"


def test_lifecycle_coerce():
    assert Lifecycle.coerce("singleton") is Lifecycle.SINGLETON
    assert Lifecycle.coerce(Lifecycle.PROTOTYPE) is Lifecycle.PROTOTYPE
    with pytest.raises(InvalidArgumentError):
        Lifecycle.coerce("transient")
