from fastapi_restful import Api
from typing import List

from api import resources
from api.resources.abstract_resource import AbstractResource
from simple_common.logger import logger
from simple_common.utils import get_all_class_instances


class ResourceBuilder:
    def __init__(self) -> None:
        self.__resources_module = resources.__name__
        self.__logger = logger

    def get_resources(self) -> List[AbstractResource]:
        resource_instances = [
            instance
            for instance in get_all_class_instances(self.__resources_module)
            if isinstance(instance, AbstractResource)
        ]

        return sorted(resource_instances, key=lambda resource_object: resource_object.path())

    def add_resources(self, api: Api) -> None:
        for resource_object in self.get_resources():
            api.add_resource(
                resource_object,
                resource_object.path(),
                tags=resource_object.tags(),
                dependencies=resource_object.dependencies,
            )

            self.__logger.debug(
                f"Rota {resource_object.path()} registrada "
                f"({'pública' if not resource_object.dependencies else 'autenticada'})."
            )
