"""Test basic package imports."""


def test_package_import():
    """Test that the main package can be imported."""
    import git_playground

    assert git_playground.__version__ == "0.1.0"


def test_main_module_import():
    """Test that main modules can be imported."""
    from git_playground import interfaces, main
    from git_playground.services import ConfigurationManager, SessionController

    assert callable(main.main)
    assert hasattr(interfaces, "ISessionController")
    assert ConfigurationManager and SessionController


def test_models_import():
    """Test that model modules can be imported."""
    from git_playground.models import command, config, graph, outcome, repository

    assert repository.RepositoryState
    assert command.CommitCommand
    assert outcome.CommandOutcome
    assert config.SimulatorConfig
    assert graph.RepositoryGraph
