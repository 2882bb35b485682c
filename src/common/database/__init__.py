from common.database.connection import CommissionsConnection
