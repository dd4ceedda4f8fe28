"""
Unit tests for the completion client
"""

import pytest
from unittest.mock import AsyncMock, patch

from insight_miner.services.completion_client import CompletionClient


class TestCompletionClient:
    """Test cases for CompletionClient"""
    
    @patch("insight_miner.services.completion_client.OpenAI")
    def test_sampling_parameters(self, openai_class):
        """Test sampling parameters"""
        client = CompletionClient(api_key="sk-test", model="gpt-3.5-turbo-instruct")
        
        client.get_llm()
        
        kwargs = openai_class.call_args.kwargs
        assert kwargs["model"] == "gpt-3.5-turbo-instruct"
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1024
        assert kwargs["top_p"] == 1.0
        assert kwargs["frequency_penalty"] == 0
        assert kwargs["presence_penalty"] == 0
        assert kwargs["n"] == 1
        assert kwargs["max_retries"] == 0
        assert kwargs["timeout"] > 0
    
    @patch("insight_miner.services.completion_client.OpenAI")
    def test_llm_is_reused(self, openai_class):
        """Test that the LLM is built once and reused"""
        client = CompletionClient(api_key="sk-test")
        
        assert client.get_llm() is client.get_llm()
        openai_class.assert_called_once()
    
    @pytest.mark.asyncio
    async def test_complete(self):
        """Test completing a prompt"""
        with patch("insight_miner.services.completion_client.OpenAI") as openai_class:
            openai_class.return_value.ainvoke = AsyncMock(return_value='{"charts": []}')
            client = CompletionClient(api_key="sk-test")
            
            text = await client.complete("prompt text")
        
        assert text == '{"charts": []}'
        openai_class.return_value.ainvoke.assert_awaited_once_with("prompt text")
