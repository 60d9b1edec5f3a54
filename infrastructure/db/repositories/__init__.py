from .contract_repo_sqlalchemy import ContractRepoSqlalchemy
from .payment_repo_sqlalchemy import MonthlyPaymentRepoSqlalchemy
from .settings_repo_sqlalchemy import SettingsRepoSqlalchemy

__all__ = ["ContractRepoSqlalchemy", "MonthlyPaymentRepoSqlalchemy", "SettingsRepoSqlalchemy"]
