from abc import ABC, abstractmethod
from typing import Any, List, Optional
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from tripdiary.repositories.base import ProviderConfigurationError


class BaseAgent(ABC):
    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "gpt-3.5-turbo",
        temperature: float = 0.7,
        llm: Optional[BaseChatModel] = None,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.temperature = temperature
        self._llm = llm
        self._chain: Optional[Runnable] = None

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            if not self.api_key:
                raise ProviderConfigurationError(
                    "The OpenAI API key is not configured. Set OPENAI_API_KEY in your .env file."
                )
            self._llm = ChatOpenAI(
                model=self.model_name,
                temperature=self.temperature,
                api_key=self.api_key,
            )
        return self._llm

    @property
    def chain(self) -> Runnable:
        if self._chain is None:
            self._chain = self._setup_chain()
        return self._chain

    @abstractmethod
    def _setup_chain(self) -> Runnable:
        """Build the LangChain runnable with the appropriate prompt template."""
        pass

    @abstractmethod
    async def process(self, **kwargs) -> Any:
        """Process the agent's specific task."""
        pass

    def _create_chain(
        self,
        template: str,
        input_variables: List[str],
        output_model: type[BaseModel],
    ) -> Runnable:
        """Create a prompt | llm | parser chain producing an instance of output_model."""
        parser = PydanticOutputParser(pydantic_object=output_model)
        prompt = PromptTemplate(
            template=template,
            input_variables=input_variables,
            partial_variables={"format_instructions": parser.get_format_instructions()},
        )
        return prompt | self.llm | parser
